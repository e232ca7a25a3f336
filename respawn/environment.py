"""Supervision hints derived from the process environment.

The inspector is a pure function over an explicit environment snapshot and
platform description, so callers (and tests) never have to mutate
``os.environ`` or ``sys.platform``.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from respawn.config import DEFAULT_ENV_PREFIX

EnvironmentSnapshot = Mapping[str, str]

# Set by launchd for jobs it starts.
LAUNCHD_HINT_VARS = ("LAUNCH_JOB_LABEL", "LAUNCH_JOB_NAME")
# Set by systemd for service units; INVOCATION_ID is the most common.
SYSTEMD_HINT_VARS = ("INVOCATION_ID", "SYSTEMD_EXEC_PID", "JOURNAL_STREAM")

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class PlatformInfo:
    """Operating system identity, as reported by ``sys.platform``."""

    system: str

    @property
    def is_darwin(self) -> bool:
        return self.system == "darwin"

    @classmethod
    def current(cls) -> PlatformInfo:
        return cls(system=sys.platform)


@dataclass(frozen=True)
class SupervisionHints:
    """What the environment says about who is responsible for restarts."""

    no_respawn_requested: bool
    launchd_hint_present: bool
    systemd_hint_present: bool
    launchd_label: str | None
    is_darwin_platform: bool

    @property
    def supervised(self) -> bool:
        """True when any supervisor marker is present."""
        return self.launchd_hint_present or self.systemd_hint_present


def snapshot_environment() -> dict[str, str]:
    """Copy the live process environment."""
    return dict(os.environ)


def no_respawn_var(env_prefix: str = DEFAULT_ENV_PREFIX) -> str:
    return f"{env_prefix}_NO_RESPAWN"


def launchd_label_var(env_prefix: str = DEFAULT_ENV_PREFIX) -> str:
    return f"{env_prefix}_LAUNCHD_LABEL"


def _is_truthy(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in _TRUTHY


def _non_blank(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def inspect(
    env: EnvironmentSnapshot,
    platform: PlatformInfo,
    *,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    label_var: str | None = None,
) -> SupervisionHints:
    """Classify the hosting context.

    Args:
        env: Environment variables to inspect.
        platform: Operating system identity.
        env_prefix: Prefix of the application-specific variables
            (``{prefix}_NO_RESPAWN`` and ``{prefix}_LAUNCHD_LABEL``).
        label_var: Overrides the name of the launchd label variable.

    Returns:
        A fresh :class:`SupervisionHints`. Absent variables yield
        ``False`` / ``None``; this never raises.
    """
    return SupervisionHints(
        no_respawn_requested=_is_truthy(env.get(no_respawn_var(env_prefix))),
        launchd_hint_present=any(_non_blank(env.get(key)) for key in LAUNCHD_HINT_VARS),
        systemd_hint_present=any(_non_blank(env.get(key)) for key in SYSTEMD_HINT_VARS),
        launchd_label=_non_blank(env.get(label_var or launchd_label_var(env_prefix))),
        is_darwin_platform=platform.is_darwin,
    )
