"""Platform detection and factory functions.

All platform-specific imports are lazy so that a collaborator for one
operating system is never loaded on another.
"""

from __future__ import annotations

import sys

from respawn.config import DEFAULT_KICKSTART_TIMEOUT
from respawn.exceptions import UnsupportedPlatformError
from respawn.platform.interfaces import ProcessSpawner, SupervisorRestartTrigger


def detect_platform() -> str:
    """Detect the current operating system.

    Returns:
        ``"linux"``, ``"darwin"`` or ``"windows"``.

    Raises:
        UnsupportedPlatformError: If the platform is unsupported.
    """
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform == "win32":
        return "windows"
    raise UnsupportedPlatformError(f"Unsupported platform: {sys.platform}")


def create_restart_trigger(
    platform: str | None = None,
    timeout: float = DEFAULT_KICKSTART_TIMEOUT,
    systemd_user: bool = True,
    systemd_fallback_to_system: bool = True,
) -> SupervisorRestartTrigger:
    """Create the service-manager restart trigger for a platform.

    Args:
        platform: Override auto-detection (``"linux"`` or ``"darwin"``).
        timeout: Seconds to wait for the service-manager tool.
        systemd_user: On Linux, restart the user-scope unit first.
        systemd_fallback_to_system: On Linux, retry at system scope once.

    Returns:
        A :class:`SupervisorRestartTrigger` implementation.

    Raises:
        UnsupportedPlatformError: If the platform has no service-manager
            integration (e.g. Windows).
    """
    platform = platform or detect_platform()

    if platform == "darwin":
        from respawn.platform.darwin.kickstart import LaunchctlKickstart

        return LaunchctlKickstart(timeout=timeout)

    if platform == "linux":
        from respawn.platform._linux_systemd import SystemctlRestart

        return SystemctlRestart(
            timeout=timeout,
            user=systemd_user,
            fallback_to_system=systemd_fallback_to_system,
        )

    raise UnsupportedPlatformError(f"Unsupported platform: {platform}")


def create_restart_trigger_from_config(
    config: dict, platform: str | None = None
) -> SupervisorRestartTrigger:
    """Create a restart trigger using the ``kickstart`` and ``systemd`` config sections."""
    return create_restart_trigger(
        platform=platform,
        timeout=config["kickstart"]["timeout_sec"],
        systemd_user=config["systemd"]["user"],
        systemd_fallback_to_system=config["systemd"]["fallback_to_system"],
    )


def create_process_spawner() -> ProcessSpawner:
    """Create the detached process spawner (same on every platform)."""
    from respawn.platform.spawner import DetachedProcessSpawner

    return DetachedProcessSpawner()
