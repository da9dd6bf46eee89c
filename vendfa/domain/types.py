"""Core types and dataclasses for VendFA."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from vendfa.app.errors import InvalidInputError

# Nominal price of the single product, in currency units.
PRICE = 5


# =============================================================================
# Enums
# =============================================================================


class State(str, Enum):
    """DFA state. S_n roughly tracks n coin-units toward the price."""

    S0 = "S0"
    S1 = "S1"
    S2 = "S2"
    S3 = "S3"
    S4 = "S4"
    S5 = "S5"

    @property
    def ordinal(self) -> int:
        """Position in the ordered enumeration."""
        return int(self.value[1:])

    @property
    def is_accepting(self) -> bool:
        return self is ACCEPT_STATE


INITIAL_STATE = State.S0
ACCEPT_STATE = State.S5


class Coin(IntEnum):
    """Accepted coin denominations."""

    ONE = 1
    TWO = 2

    @classmethod
    def parse(cls, value: Any) -> Coin:
        """
        Convert a raw input value into a Coin.

        Accepts Coin members, plain ints and digit strings ("1", " 2 ").
        Booleans and floats are rejected even though they compare equal
        to 1 or 2.

        Raises:
            InvalidInputError: value is not a valid denomination
        """
        accepted = tuple(int(c) for c in cls)
        if isinstance(value, cls):
            return value

        try:
            number = value
            if isinstance(value, str):
                text = value.strip()
                if not (text.isascii() and text.isdigit()):
                    raise InvalidInputError(value, accepted)
                # int() itself refuses digit strings past the interpreter limit
                number = int(text)
            if isinstance(number, bool) or not isinstance(number, int):
                raise InvalidInputError(value, accepted)
            return cls(number)
        except ValueError:
            raise InvalidInputError(value, accepted) from None


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class TransactionRecord:
    """One applied transition. Immutable once appended to the history."""

    from_state: State
    to_state: State
    coin: Coin
    total: int  # cumulative, after this coin
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_state.value,
            "to": self.to_state.value,
            "input": int(self.coin),
            "total": self.total,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a single coin insertion."""

    previous_state: State
    current_state: State
    total_amount: int
    is_accepted: bool

    @property
    def dispensed(self) -> bool:
        """True only on the insertion that enters the accepting state."""
        return self.is_accepted and self.previous_state is not ACCEPT_STATE


@dataclass(frozen=True)
class MachineSnapshot:
    """Point-in-time view of the machine, derived on demand."""

    current_state: State
    total_amount: int
    is_accepted: bool

    @property
    def amount_due(self) -> int:
        """Currency units still needed before the product is dispensed."""
        if self.is_accepted:
            return 0
        return max(0, PRICE - self.total_amount)
