"""Exceptions raised by sysprobe."""


class SysprobeError(Exception):
    """Base exception for sysprobe errors."""
    pass


class SnapshotError(SysprobeError):
    """A snapshot could not be built at all (not a single probe failure)."""
    pass


class ConfigError(SysprobeError):
    """Configuration file is unreadable or invalid."""
    pass
