"""systemd restart trigger using ``systemctl restart``."""

import shutil
import subprocess

from respawn.platform.interfaces import TriggerResult
from respawn.utils.logging import get_logger

log = get_logger("platform.linux_systemd")

METHOD = "systemd"


class SystemctlRestart:
    """Restart a systemd unit, user scope first.

    Args:
        timeout: Seconds to wait for each ``systemctl`` call.
        user: Try ``systemctl --user`` first.
        fallback_to_system: If the user-scope call fails, try the system
            scope once.
    """

    def __init__(self, timeout: float = 10.0, user: bool = True, fallback_to_system: bool = True):
        self.timeout = timeout
        self.user = user
        self.fallback_to_system = fallback_to_system

    def _scopes(self) -> list[list[str]]:
        if not self.user:
            return [[]]
        if self.fallback_to_system:
            return [["--user"], []]
        return [["--user"]]

    def _run(self, systemctl: str, scope: list[str], unit: str) -> str | None:
        """Run one restart call. Returns an error detail, or None on success."""
        cmd = [systemctl, *scope, "restart", unit]
        log.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            return f"systemctl timed out after {self.timeout}s"
        except OSError as e:
            return str(e) or repr(e)

        if result.returncode != 0:
            return (
                (result.stderr or "").strip()
                or (result.stdout or "").strip()
                or f"systemctl exited with code {result.returncode}"
            )
        return None

    def attempt(self, label: str) -> TriggerResult:
        """Restart the unit named *label*."""
        systemctl = shutil.which("systemctl")
        if systemctl is None:
            return TriggerResult(ok=False, method=METHOD, detail="systemctl not found")

        errors = []
        for scope in self._scopes():
            error = self._run(systemctl, scope, label)
            if error is None:
                return TriggerResult(ok=True, method=METHOD)
            name = "user" if scope else "system"
            log.warning("systemctl %s restart of %s failed: %s", name, label, error)
            errors.append(f"{name}: {error}")

        return TriggerResult(ok=False, method=METHOD, detail="; ".join(errors))
