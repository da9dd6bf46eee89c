"""Plain-text rendering of machine snapshots and the transaction log."""

from __future__ import annotations

from collections.abc import Sequence

from vendfa.app.settings import DisplayConfig
from vendfa.domain.types import MachineSnapshot, State, TransactionRecord

NO_TRANSACTIONS = "No transactions yet"


def format_amount(amount: int, currency: str) -> str:
    return f"{currency}{amount}"


def format_status(snapshot: MachineSnapshot, currency: str = "₹") -> str:
    """Status line shown under the state strip."""
    if snapshot.is_accepted:
        return "Item dispensed!"
    return f"Insert {format_amount(snapshot.amount_due, currency)} more"


def format_record(
    record: TransactionRecord,
    currency: str = "₹",
    time_format: str = "%H:%M:%S",
) -> str:
    """One log line, e.g. ``12:00:01: S0 -> S2 [₹2 inserted, Total: ₹2]``."""
    return (
        f"{record.timestamp.strftime(time_format)}: "
        f"{record.from_state.value} -> {record.to_state.value} "
        f"[{format_amount(int(record.coin), currency)} inserted, "
        f"Total: {format_amount(record.total, currency)}]"
    )


def format_history(
    records: Sequence[TransactionRecord],
    config: DisplayConfig | None = None,
) -> list[str]:
    """Render the log, newest first unless configured otherwise."""
    config = config or DisplayConfig()
    if not records:
        return [NO_TRANSACTIONS]

    ordered = list(reversed(records)) if config.newest_first else list(records)
    if config.max_log_entries:
        ordered = ordered[: config.max_log_entries]

    return [
        format_record(record, config.currency_symbol, config.time_format)
        for record in ordered
    ]


def format_state_strip(current: State) -> str:
    """All states in order with the current one bracketed."""
    return " ".join(
        f"[{state.value}]" if state is current else f" {state.value} "
        for state in State
    )


def render_screen(
    snapshot: MachineSnapshot,
    history: Sequence[TransactionRecord],
    config: DisplayConfig | None = None,
) -> str:
    """Full console screen: states, total, status and transaction log."""
    config = config or DisplayConfig()
    lines = [
        format_state_strip(snapshot.current_state),
        f"State: {snapshot.current_state.value}",
        f"Total: {format_amount(snapshot.total_amount, config.currency_symbol)}",
        f"Status: {format_status(snapshot, config.currency_symbol)}",
        "Transactions:",
    ]
    lines.extend(f"  {line}" for line in format_history(history, config))
    return "\n".join(lines)
