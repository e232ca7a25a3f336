"""Tests verifying the project layout."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


def test_respawn_package_exists():
    """The main package respawn/ must exist."""
    assert (PROJECT_ROOT / "respawn").is_dir()
    assert (PROJECT_ROOT / "respawn" / "orchestrator.py").is_file()
    assert (PROJECT_ROOT / "respawn" / "environment.py").is_file()


def test_platform_module_exists():
    """Platform collaborators must exist."""
    platform_dir = PROJECT_ROOT / "respawn" / "platform"
    assert (platform_dir / "interfaces.py").is_file()
    assert (platform_dir / "factory.py").is_file()
    assert (platform_dir / "spawner.py").is_file()
    assert (platform_dir / "_linux_systemd.py").is_file()
    assert (platform_dir / "darwin" / "kickstart.py").is_file()


def test_utils_module_exists():
    assert (PROJECT_ROOT / "respawn" / "utils" / "logging.py").is_file()


def test_example_config_exists():
    """The shipped example configuration must exist."""
    assert (PROJECT_ROOT / "respawn" / "config.example.yaml").is_file()


def test_main_entry_point_exists():
    assert (PROJECT_ROOT / "respawn" / "main.py").is_file()
