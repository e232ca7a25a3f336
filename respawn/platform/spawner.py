"""Detached replacement-process spawner built on ``subprocess.Popen``."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence

from respawn.exceptions import SpawnError
from respawn.platform.interfaces import SpawnOptions
from respawn.utils.logging import get_logger

log = get_logger("platform.spawner")


class DetachedProcessSpawner:
    """Start a child that outlives its parent.

    On POSIX the child gets its own session, so signals aimed at the
    parent's process group do not reach it. On Windows it gets its own
    process group, and also leaves the parent's console when it does not
    inherit stdio. The parent never waits on the child.
    """

    def _popen_kwargs(self, options: SpawnOptions) -> dict:
        kwargs: dict = {}
        if options.detached:
            if sys.platform == "win32":
                flags = subprocess.CREATE_NEW_PROCESS_GROUP
                if not options.inherit_stdio:
                    flags |= subprocess.DETACHED_PROCESS
                kwargs["creationflags"] = flags
            else:
                kwargs["start_new_session"] = True
        if not options.inherit_stdio:
            kwargs["stdin"] = subprocess.DEVNULL
            kwargs["stdout"] = subprocess.DEVNULL
            kwargs["stderr"] = subprocess.DEVNULL
        if options.env is not None:
            kwargs["env"] = dict(options.env)
        if options.cwd is not None:
            kwargs["cwd"] = options.cwd
        return kwargs

    def spawn(
        self,
        executable: str,
        arguments: Sequence[str],
        options: SpawnOptions,
    ) -> subprocess.Popen:
        """Start *executable* with *arguments*.

        Raises:
            SpawnError: If the operating system refused to start the process.
        """
        cmd = [executable, *arguments]
        try:
            process = subprocess.Popen(cmd, **self._popen_kwargs(options))
        except OSError as e:
            raise SpawnError(str(e) or repr(e)) from e

        log.info("Started replacement process pid=%s: %s", process.pid, " ".join(cmd))
        return process
