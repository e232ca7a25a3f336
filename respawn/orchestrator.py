"""Restart-strategy decision engine.

Decides how the current process gets replaced, and carries out at most one
action:

1. ``{PREFIX}_NO_RESPAWN`` set -> :class:`Disabled`, nothing happens.
2. Supervisor hint on macOS with an explicit launchd label -> kickstart the
   job; :class:`Supervised` on success, :class:`Failed` otherwise.
3. Any other supervisor hint -> :class:`Supervised`; the supervisor restarts
   us once we exit.
4. No supervisor -> spawn a detached copy of ourselves -> :class:`Spawned`
   or :class:`Failed`.

The engine is one-shot and not idempotent: every call acts. Callers should
call it once and exit when ``outcome.requires_exit`` is true.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Union

from respawn.config import get_config
from respawn.environment import (
    EnvironmentSnapshot,
    PlatformInfo,
    SupervisionHints,
    inspect,
    snapshot_environment,
)
from respawn.invocation import Invocation
from respawn.platform.interfaces import ProcessSpawner, SpawnOptions, SupervisorRestartTrigger
from respawn.utils.logging import get_logger

log = get_logger("orchestrator")

KICKSTART_FAILED_MARKER = "launchd kickstart failed"


@dataclass(frozen=True)
class Disabled:
    """Respawning was explicitly turned off."""

    mode: ClassVar[str] = "disabled"
    requires_exit: ClassVar[bool] = False


@dataclass(frozen=True)
class Supervised:
    """A supervisor is, or has been asked to be, responsible for the restart."""

    mode: ClassVar[str] = "supervised"
    requires_exit: ClassVar[bool] = True


@dataclass(frozen=True)
class Spawned:
    """A detached replacement process was started."""

    pid: int
    mode: ClassVar[str] = "spawned"
    requires_exit: ClassVar[bool] = True


@dataclass(frozen=True)
class Failed:
    """The attempted restart action did not succeed."""

    detail: str
    mode: ClassVar[str] = "failed"
    requires_exit: ClassVar[bool] = False


RestartOutcome = Union[Disabled, Supervised, Spawned, Failed]


class RestartPlan(enum.Enum):
    """The action a restart would take, before anything is done."""

    DISABLED = "disabled"
    KICKSTART = "kickstart"
    SUPERVISED = "supervised"
    SPAWN = "spawn"


def plan_restart(hints: SupervisionHints) -> RestartPlan:
    """Pick the restart action for *hints*. Pure; no side effects."""
    if hints.no_respawn_requested:
        return RestartPlan.DISABLED
    if hints.supervised:
        if hints.is_darwin_platform and hints.launchd_label:
            return RestartPlan.KICKSTART
        return RestartPlan.SUPERVISED
    return RestartPlan.SPAWN


class RestartOrchestrator:
    """Drive one restart decision through the injected collaborators.

    Settings not passed explicitly come from *config*, which defaults to
    the cached :func:`respawn.config.get_config`. The config is only loaded
    when one of those settings is actually needed.

    Args:
        trigger: Service-manager restart trigger. Created for the current
            platform on first use when omitted, with the ``kickstart`` and
            ``systemd`` config sections.
        spawner: Replacement-process spawner. Defaults to the detached
            ``subprocess`` spawner.
        env_prefix: Prefix of the application-specific variables.
            Defaults to ``respawn.env_prefix``.
        label_var: Overrides the launchd label variable name. Defaults to
            ``respawn.launchd_label_var``.
        config: Configuration dictionary as returned by
            :func:`respawn.config.load_config`.
    """

    def __init__(
        self,
        trigger: SupervisorRestartTrigger | None = None,
        spawner: ProcessSpawner | None = None,
        *,
        env_prefix: str | None = None,
        label_var: str | None = None,
        config: dict | None = None,
    ):
        self._trigger = trigger
        self._spawner = spawner
        self._env_prefix = env_prefix
        self._label_var = label_var
        self._config = config

    @property
    def config(self) -> dict:
        if self._config is None:
            self._config = get_config()
        return self._config

    @property
    def env_prefix(self) -> str:
        if self._env_prefix is None:
            self._env_prefix = self.config["respawn"]["env_prefix"]
        return self._env_prefix

    @property
    def label_var(self) -> str | None:
        if self._label_var is None:
            return self.config["respawn"]["launchd_label_var"]
        return self._label_var

    @property
    def trigger(self) -> SupervisorRestartTrigger:
        if self._trigger is None:
            from respawn.platform.factory import create_restart_trigger_from_config

            self._trigger = create_restart_trigger_from_config(self.config, platform="darwin")
        return self._trigger

    @property
    def spawner(self) -> ProcessSpawner:
        if self._spawner is None:
            from respawn.platform.factory import create_process_spawner

            self._spawner = create_process_spawner()
        return self._spawner

    def inspect(self, env: EnvironmentSnapshot, platform: PlatformInfo) -> SupervisionHints:
        return inspect(env, platform, env_prefix=self.env_prefix, label_var=self.label_var)

    def restart(
        self,
        env: EnvironmentSnapshot,
        platform: PlatformInfo,
        invocation: Invocation,
    ) -> RestartOutcome:
        """Decide how to restart and carry it out.

        Never raises for trigger or spawn failures; they come back as
        :class:`Failed`.
        """
        hints = self.inspect(env, platform)
        plan = plan_restart(hints)
        log.info("Restart plan: %s (%s)", plan.value, hints)

        if plan is RestartPlan.DISABLED:
            return Disabled()
        if plan is RestartPlan.KICKSTART:
            return self._kickstart(hints.launchd_label)
        if plan is RestartPlan.SUPERVISED:
            return Supervised()
        return self._spawn(invocation)

    def _kickstart(self, label: str) -> RestartOutcome:
        try:
            result = self.trigger.attempt(label)
        except Exception as e:
            log.error("launchd kickstart of %s raised: %s", label, e)
            return Failed(detail=f"{KICKSTART_FAILED_MARKER}: {e}")

        if result.ok:
            log.info("launchd kickstart of %s succeeded via %s", label, result.method)
            return Supervised()

        log.warning("launchd kickstart of %s failed: %s", label, result.detail)
        return Failed(detail=f"{KICKSTART_FAILED_MARKER}: {result.detail}")

    def _spawn(self, invocation: Invocation) -> RestartOutcome:
        options = SpawnOptions(detached=True, inherit_stdio=True)
        try:
            handle = self.spawner.spawn(
                invocation.executable,
                invocation.respawn_arguments(),
                options,
            )
        except Exception as e:
            log.error("Failed to spawn replacement process: %s", e)
            return Failed(detail=str(e) or repr(e))

        return Spawned(pid=handle.pid)


def restart_process_with_fresh_pid(
    env: EnvironmentSnapshot | None = None,
    platform: PlatformInfo | None = None,
    invocation: Invocation | None = None,
    **kwargs,
) -> RestartOutcome:
    """Restart the running process, reading the live environment.

    Args:
        env: Environment to inspect. Defaults to a copy of ``os.environ``.
        platform: Defaults to ``sys.platform``.
        invocation: Defaults to the running interpreter's command line.
        **kwargs: Passed to :class:`RestartOrchestrator`.
    """
    orchestrator = RestartOrchestrator(**kwargs)
    return orchestrator.restart(
        env if env is not None else snapshot_environment(),
        platform or PlatformInfo.current(),
        invocation or Invocation.current(),
    )
