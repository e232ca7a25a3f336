"""Custom exception hierarchy for respawn."""


class RespawnError(Exception):
    """Base exception for all respawn errors."""


class ConfigError(RespawnError):
    """Errors related to configuration loading."""


class SpawnError(RespawnError):
    """A replacement process could not be started."""


class UnsupportedPlatformError(RespawnError, RuntimeError):
    """No restart collaborator exists for the requested platform."""
