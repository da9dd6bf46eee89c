"""Custom exceptions for VendFA."""

from __future__ import annotations


class VendfaError(Exception):
    """Base exception for all VendFA errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(VendfaError):
    """Configuration-related error."""

    pass


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration for {key}={value}: {reason}")


# =============================================================================
# State Machine Errors
# =============================================================================


class MachineError(VendfaError):
    """Vending machine error."""

    pass


class InvalidInputError(MachineError):
    """Coin value is not one of the accepted denominations."""

    def __init__(self, value: object, accepted: tuple[int, ...] = (1, 2)):
        self.value = value
        self.accepted = accepted
        super().__init__(
            f"Invalid coin {value!r}: accepted denominations are {list(accepted)}"
        )


class InvalidTransitionTableError(MachineError):
    """Transition table is not a total function over states and coins."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid transition table: {reason}")
