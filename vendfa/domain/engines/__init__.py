"""State machine engine for the coin-operated vending machine."""

from vendfa.domain.engines.vending_engine import (
    DEFAULT_TRANSITIONS,
    TransitionTable,
    VendingMachineEngine,
)

__all__ = ["DEFAULT_TRANSITIONS", "TransitionTable", "VendingMachineEngine"]
