"""
Vending Engine - DFA for a two-denomination coin-operated vending machine.

Consumes coins (1 or 2 units) and walks the states S0..S5; S5 means the
product has been paid for.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Optional

from vendfa.app.clock import Clock
from vendfa.app.errors import InvalidInputError, InvalidTransitionTableError
from vendfa.app.logging import get_component_logger
from vendfa.domain.types import (
    ACCEPT_STATE,
    INITIAL_STATE,
    Coin,
    MachineSnapshot,
    State,
    TransactionRecord,
    TransitionResult,
)

logger = get_component_logger("vending_engine")


# =============================================================================
# Transition Table
# =============================================================================


# Fixed lookup; not derivable from the running total (S3 + 2 skips S4).
DEFAULT_TRANSITIONS: Mapping[tuple[State, Coin], State] = MappingProxyType({
    (State.S0, Coin.ONE): State.S1,
    (State.S0, Coin.TWO): State.S2,
    (State.S1, Coin.ONE): State.S2,
    (State.S1, Coin.TWO): State.S3,
    (State.S2, Coin.ONE): State.S3,
    (State.S2, Coin.TWO): State.S4,
    (State.S3, Coin.ONE): State.S4,
    (State.S3, Coin.TWO): State.S5,
    (State.S4, Coin.ONE): State.S5,
    (State.S4, Coin.TWO): State.S5,
    (State.S5, Coin.ONE): State.S5,
    (State.S5, Coin.TWO): State.S5,
})


class TransitionTable:
    """
    Total transition function over (State, Coin).

    Validated on construction: every state must have exactly one edge per
    coin, and every edge must land on a known state.
    """

    def __init__(self, transitions: Mapping[tuple[State, Coin], State] = DEFAULT_TRANSITIONS):
        self._transitions = MappingProxyType(self._validate(transitions))

    @staticmethod
    def _validate(
        transitions: Mapping[tuple[Any, Any], Any],
    ) -> dict[tuple[State, Coin], State]:
        validated: dict[tuple[State, Coin], State] = {}

        for key, target in transitions.items():
            if not isinstance(key, tuple) or len(key) != 2:
                raise InvalidTransitionTableError(f"malformed key {key!r}")
            source, coin = key
            if not isinstance(source, State):
                raise InvalidTransitionTableError(f"unknown source state {source!r}")
            if not isinstance(coin, Coin):
                raise InvalidTransitionTableError(f"unknown coin {coin!r}")
            if not isinstance(target, State):
                raise InvalidTransitionTableError(
                    f"unknown target state {target!r} for ({source.value}, {int(coin)})"
                )
            validated[(source, coin)] = target

        missing = [
            f"({state.value}, {int(coin)})"
            for state in State
            for coin in Coin
            if (state, coin) not in validated
        ]
        if missing:
            raise InvalidTransitionTableError(f"missing entries {', '.join(missing)}")

        return validated

    def next_state(self, state: State, coin: Coin) -> State:
        """Look up the successor of state on coin."""
        return self._transitions[(state, coin)]

    def as_dict(self) -> dict[State, dict[int, State]]:
        """Nested view: state -> {coin value -> next state}."""
        return {
            state: {int(coin): self._transitions[(state, coin)] for coin in Coin}
            for state in State
        }

    def __len__(self) -> int:
        return len(self._transitions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return dict(self._transitions) == dict(other._transitions)


# =============================================================================
# Vending Machine Engine
# =============================================================================


class VendingMachineEngine:
    """
    Finite-state engine with an append-only transaction log.

    States:
        S0: Initial, nothing inserted
        S1..S4: Partial payment
        S5: Accepting; absorbs every further coin until reset

    Features:
        - Deterministic transitions from a validated table
        - Invalid coins rejected before any mutation
        - Record timestamps come from the injected clock
    """

    def __init__(
        self,
        table: Optional[TransitionTable] = None,
        clock: Optional[Clock] = None,
    ):
        self._table = table if table is not None else TransitionTable()
        self._clock = clock if clock is not None else Clock()
        self._state = INITIAL_STATE
        self._total = 0
        self._history: list[TransactionRecord] = []

    @property
    def current_state(self) -> State:
        """Current DFA state."""
        return self._state

    @property
    def total_amount(self) -> int:
        """Sum of coins inserted since the last reset."""
        return self._total

    @property
    def history(self) -> tuple[TransactionRecord, ...]:
        """Transaction log, oldest first."""
        return tuple(self._history)

    @property
    def table(self) -> TransitionTable:
        return self._table

    def insert_coin(self, coin: Any) -> TransitionResult:
        """
        Apply one coin to the machine.

        Args:
            coin: 1, 2, a Coin member or a digit string

        Returns:
            TransitionResult describing the post-transition state

        Raises:
            InvalidInputError: coin is not an accepted denomination; the
                machine is left untouched
        """
        try:
            parsed = Coin.parse(coin)
        except InvalidInputError:
            logger.warning(
                "Coin rejected",
                event_type="coin_rejected",
                coin=repr(coin),
                state=self._state.value,
            )
            raise

        previous = self._state
        next_state = self._table.next_state(previous, parsed)
        total = self._total + int(parsed)

        record = TransactionRecord(
            from_state=previous,
            to_state=next_state,
            coin=parsed,
            total=total,
            timestamp=self._clock.now_utc(),
        )

        self._state = next_state
        self._total = total
        self._history.append(record)

        logger.debug(
            "Coin inserted",
            event_type="coin_inserted",
            from_state=previous.value,
            to_state=next_state.value,
            coin=int(parsed),
            total=total,
        )

        result = TransitionResult(
            previous_state=previous,
            current_state=next_state,
            total_amount=total,
            is_accepted=next_state is ACCEPT_STATE,
        )

        if result.dispensed:
            logger.info(
                "Purchase threshold reached",
                event_type="threshold_reached",
                total=total,
                coins=len(self._history),
            )

        return result

    def run(self, coins: Iterable[Any]) -> list[TransitionResult]:
        """Insert each coin in order and collect the results."""
        return [self.insert_coin(coin) for coin in coins]

    def is_in_accept_state(self) -> bool:
        """Is the machine in the accepting state?"""
        return self._state is ACCEPT_STATE

    def reset(self) -> None:
        """Return to S0 with a zero total and an empty history."""
        discarded = len(self._history)
        self._state = INITIAL_STATE
        self._total = 0
        self._history = []

        logger.info(
            "Machine reset",
            event_type="machine_reset",
            discarded_records=discarded,
        )

    def get_state_info(self) -> MachineSnapshot:
        """Return a snapshot of the current state."""
        return MachineSnapshot(
            current_state=self._state,
            total_amount=self._total,
            is_accepted=self.is_in_accept_state(),
        )
