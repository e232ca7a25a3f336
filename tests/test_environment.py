"""Tests for supervision hint inspection."""

import os
from unittest.mock import patch

import pytest

from respawn.environment import (
    PlatformInfo,
    SupervisionHints,
    inspect,
    launchd_label_var,
    no_respawn_var,
    snapshot_environment,
)

LINUX = PlatformInfo("linux")


def test_empty_environment_has_no_hints():
    hints = inspect({}, LINUX)
    assert hints == SupervisionHints(
        no_respawn_requested=False,
        launchd_hint_present=False,
        systemd_hint_present=False,
        launchd_label=None,
        is_darwin_platform=False,
    )
    assert hints.supervised is False


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
def test_truthy_disable_flag(value):
    assert inspect({"GATEWAY_NO_RESPAWN": value}, LINUX).no_respawn_requested


@pytest.mark.parametrize("value", ["", "0", "false", "no", "off"])
def test_falsy_disable_flag(value):
    assert not inspect({"GATEWAY_NO_RESPAWN": value}, LINUX).no_respawn_requested


@pytest.mark.parametrize("var", ["INVOCATION_ID", "SYSTEMD_EXEC_PID", "JOURNAL_STREAM"])
def test_systemd_hint_vars(var):
    hints = inspect({var: "x"}, LINUX)
    assert hints.systemd_hint_present
    assert not hints.launchd_hint_present
    assert hints.supervised


@pytest.mark.parametrize("var", ["LAUNCH_JOB_LABEL", "LAUNCH_JOB_NAME"])
def test_launchd_hint_vars(var):
    hints = inspect({var: "ai.example.gateway"}, LINUX)
    assert hints.launchd_hint_present
    assert not hints.systemd_hint_present
    assert hints.supervised


def test_blank_hint_is_absent():
    hints = inspect({"INVOCATION_ID": "   ", "LAUNCH_JOB_LABEL": ""}, LINUX)
    assert hints.supervised is False


def test_launchd_label_is_trimmed():
    hints = inspect({"GATEWAY_LAUNCHD_LABEL": "  ai.example.gateway \n"}, LINUX)
    assert hints.launchd_label == "ai.example.gateway"


def test_blank_launchd_label_is_none():
    assert inspect({"GATEWAY_LAUNCHD_LABEL": "  "}, LINUX).launchd_label is None


def test_env_prefix():
    env = {"MYAPP_NO_RESPAWN": "1", "MYAPP_LAUNCHD_LABEL": "com.example"}
    hints = inspect(env, LINUX, env_prefix="MYAPP")
    assert hints.no_respawn_requested
    assert hints.launchd_label == "com.example"
    assert not inspect(env, LINUX).no_respawn_requested


def test_label_var_override():
    env = {"GATEWAY_LAUNCHD_LABEL": "ignored", "JOB": "used"}
    assert inspect(env, LINUX, label_var="JOB").launchd_label == "used"


def test_variable_names():
    assert no_respawn_var("APP") == "APP_NO_RESPAWN"
    assert launchd_label_var("APP") == "APP_LAUNCHD_LABEL"


def test_darwin_platform():
    assert inspect({}, PlatformInfo("darwin")).is_darwin_platform
    assert not inspect({}, PlatformInfo("win32")).is_darwin_platform


def test_hints_are_read_only():
    hints = inspect({}, LINUX)
    with pytest.raises(AttributeError):
        hints.systemd_hint_present = True


def test_platform_current_reads_sys_platform():
    with patch("respawn.environment.sys") as mock_sys:
        mock_sys.platform = "darwin"
        assert PlatformInfo.current() == PlatformInfo("darwin")


def test_snapshot_is_a_copy():
    with patch.dict("os.environ", {"RESPAWN_TEST_VAR": "1"}):
        snapshot = snapshot_environment()
        snapshot["RESPAWN_TEST_VAR"] = "2"
        assert os.environ["RESPAWN_TEST_VAR"] == "1"
