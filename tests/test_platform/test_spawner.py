"""Tests for the detached process spawner."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from respawn.exceptions import SpawnError
from respawn.platform.interfaces import SpawnOptions
from respawn.platform.spawner import DetachedProcessSpawner


def _spawn(options=None, platform="linux"):
    with (
        patch("respawn.platform.spawner.subprocess.Popen") as mock_popen,
        patch("respawn.platform.spawner.sys") as mock_sys,
    ):
        mock_sys.platform = platform
        mock_popen.return_value = MagicMock(pid=4242)
        handle = DetachedProcessSpawner().spawn(
            "/usr/bin/python3", ["-u", "app.py", "run"], options or SpawnOptions()
        )
    return handle, mock_popen


def test_spawn_starts_new_session_and_inherits_stdio():
    handle, mock_popen = _spawn()

    assert handle.pid == 4242
    mock_popen.assert_called_once_with(
        ["/usr/bin/python3", "-u", "app.py", "run"], start_new_session=True
    )


def test_spawn_does_not_wait_on_child():
    handle, _ = _spawn()
    handle.wait.assert_not_called()
    handle.communicate.assert_not_called()


def test_spawn_windows_uses_new_process_group():
    with patch("respawn.platform.spawner.subprocess") as mock_sub:
        mock_sub.CREATE_NEW_PROCESS_GROUP = 0x200
        with patch("respawn.platform.spawner.sys") as mock_sys:
            mock_sys.platform = "win32"
            DetachedProcessSpawner().spawn("python.exe", ["app.py"], SpawnOptions())

    mock_sub.Popen.assert_called_once_with(["python.exe", "app.py"], creationflags=0x200)


def test_spawn_windows_without_stdio_leaves_console():
    with patch("respawn.platform.spawner.subprocess") as mock_sub:
        mock_sub.CREATE_NEW_PROCESS_GROUP = 0x200
        mock_sub.DETACHED_PROCESS = 0x8
        with patch("respawn.platform.spawner.sys") as mock_sys:
            mock_sys.platform = "win32"
            DetachedProcessSpawner().spawn(
                "python.exe", ["app.py"], SpawnOptions(inherit_stdio=False)
            )

    kwargs = mock_sub.Popen.call_args.kwargs
    assert kwargs["creationflags"] == 0x208
    assert kwargs["stdin"] is mock_sub.DEVNULL
    assert kwargs["stdout"] is mock_sub.DEVNULL
    assert kwargs["stderr"] is mock_sub.DEVNULL


def test_spawn_attached():
    _, mock_popen = _spawn(SpawnOptions(detached=False))
    mock_popen.assert_called_once_with(["/usr/bin/python3", "-u", "app.py", "run"])


def test_spawn_without_stdio_uses_devnull():
    _, mock_popen = _spawn(SpawnOptions(inherit_stdio=False, env={"A": "1"}, cwd="/srv"))
    kwargs = mock_popen.call_args.kwargs
    assert kwargs["stdin"] is subprocess.DEVNULL
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stderr"] is subprocess.DEVNULL
    assert kwargs["env"] == {"A": "1"}
    assert kwargs["cwd"] == "/srv"


def test_os_error_becomes_spawn_error():
    with patch(
        "respawn.platform.spawner.subprocess.Popen",
        side_effect=FileNotFoundError(2, "No such file or directory"),
    ):
        with pytest.raises(SpawnError, match="No such file or directory"):
            DetachedProcessSpawner().spawn("/missing", [], SpawnOptions())
