"""Tests for the restart collaborator protocols and value types."""

from unittest.mock import MagicMock

import pytest

from respawn.platform._linux_systemd import SystemctlRestart
from respawn.platform.darwin.kickstart import LaunchctlKickstart
from respawn.platform.interfaces import (
    ProcessHandle,
    ProcessSpawner,
    SpawnOptions,
    SupervisorRestartTrigger,
    TriggerResult,
)
from respawn.platform.spawner import DetachedProcessSpawner


class TestTriggerResult:
    def test_success_needs_no_detail(self):
        result = TriggerResult(ok=True, method="launchctl")
        assert result.detail is None

    def test_failure_carries_detail(self):
        result = TriggerResult(ok=False, method="launchctl", detail="bad label")
        assert result.detail == "bad label"

    @pytest.mark.parametrize("detail", [None, "", "   "])
    def test_failure_without_detail_is_rejected(self, detail):
        with pytest.raises(ValueError, match="detail"):
            TriggerResult(ok=False, method="launchctl", detail=detail)


def test_spawn_options_defaults():
    options = SpawnOptions()
    assert options.detached is True
    assert options.inherit_stdio is True
    assert options.env is None
    assert options.cwd is None


def test_triggers_satisfy_protocol():
    assert isinstance(LaunchctlKickstart(), SupervisorRestartTrigger)
    assert isinstance(SystemctlRestart(), SupervisorRestartTrigger)


def test_spawner_satisfies_protocol():
    assert isinstance(DetachedProcessSpawner(), ProcessSpawner)


def test_object_with_pid_is_a_process_handle():
    handle = MagicMock(spec=["pid"])
    handle.pid = 12
    assert isinstance(handle, ProcessHandle)


def test_object_without_attempt_is_not_a_trigger():
    assert not isinstance(object(), SupervisorRestartTrigger)
