"""Exceptions raised by the configuration layer."""


class ConfigError(Exception):
    """Base class for configuration errors surfaced to callers."""


class UnknownKeyError(ConfigError, KeyError):
    """Raised when a key is not declared by any property."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown configuration key: {key}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidValueError(ConfigError, ValueError):
    """Raised when user input cannot be converted to a property's type."""

    def __init__(self, key: str, raw: object, reason: str):
        self.key = key
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid value for {key}: {raw!r} ({reason})")
