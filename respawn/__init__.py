"""In-place process restart: supervisor-aware respawn decision engine."""

from respawn.environment import PlatformInfo, SupervisionHints, inspect
from respawn.invocation import Invocation
from respawn.orchestrator import (
    Disabled,
    Failed,
    RestartOrchestrator,
    RestartOutcome,
    RestartPlan,
    Spawned,
    Supervised,
    plan_restart,
    restart_process_with_fresh_pid,
)

__all__ = [
    "Disabled",
    "Failed",
    "Invocation",
    "PlatformInfo",
    "RestartOrchestrator",
    "RestartOutcome",
    "RestartPlan",
    "Spawned",
    "Supervised",
    "SupervisionHints",
    "inspect",
    "plan_restart",
    "restart_process_with_fresh_pid",
]
