"""launchd restart trigger using ``launchctl kickstart -k``."""

from __future__ import annotations

import os
import shutil
import subprocess

from respawn.platform.interfaces import TriggerResult
from respawn.utils.logging import get_logger

log = get_logger("platform.darwin.kickstart")

METHOD = "launchctl"


class LaunchctlKickstart:
    """Restart a launchd job in the current user's GUI domain.

    ``launchctl kickstart -k`` kills the running instance (if any) and
    starts the job again, so launchd owns the new process.

    Args:
        timeout: Seconds to wait for ``launchctl``.
        domain: launchd domain target. Defaults to ``gui/<uid>``.
    """

    def __init__(self, timeout: float = 10.0, domain: str | None = None):
        self.timeout = timeout
        self.domain = domain

    def _service_target(self, label: str) -> str:
        domain = self.domain or f"gui/{os.getuid()}"
        return f"{domain}/{label}"

    def attempt(self, label: str) -> TriggerResult:
        """Kickstart the job named *label*."""
        launchctl = shutil.which("launchctl")
        if launchctl is None:
            return TriggerResult(ok=False, method=METHOD, detail="launchctl not found")

        cmd = [launchctl, "kickstart", "-k", self._service_target(label)]
        log.info("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            return TriggerResult(
                ok=False, method=METHOD, detail=f"launchctl timed out after {self.timeout}s"
            )
        except OSError as e:
            return TriggerResult(ok=False, method=METHOD, detail=str(e) or repr(e))

        if result.returncode != 0:
            detail = (
                (result.stderr or "").strip()
                or (result.stdout or "").strip()
                or f"launchctl exited with code {result.returncode}"
            )
            log.warning("launchctl kickstart failed: %s", detail)
            return TriggerResult(ok=False, method=METHOD, detail=detail)

        return TriggerResult(ok=True, method=METHOD)
