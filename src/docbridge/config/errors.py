"""Errors raised while loading docbridge settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when docbridge is configured in a way it cannot run with."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required ``DOCBRIDGE_*`` settings are absent or blank."""


class InvalidSettingError(ConfigurationError):
    """A setting is present but its value cannot be parsed."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")
        self.name = name
        self.value = value
