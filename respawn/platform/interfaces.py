"""Platform-agnostic protocols for restart collaborators.

These protocols use structural subtyping so that plain objects (e.g.
``subprocess.Popen`` as a process handle, or a test double) satisfy them
without inheriting from anything.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TriggerResult:
    """Outcome of a supervisor-native restart attempt.

    A failed result always carries a non-empty ``detail``.
    """

    ok: bool
    method: str
    detail: str | None = None

    def __post_init__(self) -> None:
        if not self.ok and not (self.detail and self.detail.strip()):
            raise ValueError("a failed TriggerResult needs a detail message")


@dataclass(frozen=True)
class SpawnOptions:
    """How a replacement process is attached to its parent."""

    detached: bool = True
    inherit_stdio: bool = True
    env: Mapping[str, str] | None = None
    cwd: str | None = None


@runtime_checkable
class ProcessHandle(Protocol):
    """A started process. Only its identifier is needed."""

    pid: int


@runtime_checkable
class SupervisorRestartTrigger(Protocol):
    """Asks a service manager to restart one of its jobs."""

    def attempt(self, label: str) -> TriggerResult:
        """Restart the job named *label*.

        Blocks until the underlying tool finishes. Failures are reported
        through the result, never raised.
        """
        ...


@runtime_checkable
class ProcessSpawner(Protocol):
    """Starts a replacement process."""

    def spawn(
        self,
        executable: str,
        arguments: Sequence[str],
        options: SpawnOptions,
    ) -> ProcessHandle:
        """Start *executable* with *arguments*.

        Raises:
            Exception: If the process could not be started.
        """
        ...
