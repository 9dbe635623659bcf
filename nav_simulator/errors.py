"""Exceptions raised by the simulation engine."""
from __future__ import annotations


class NavSimulatorError(Exception):
    """Base class for simulator errors."""


class InvalidParameterError(NavSimulatorError, ValueError):
    """A caller-supplied amount, period or percentage is outside its domain."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid {name} {value!r}: {reason}")
        self.name = name
        self.value = value
        self.reason = reason


class NoValuationAvailableError(NavSimulatorError, LookupError):
    """No NAV exists to price a required purchase."""
