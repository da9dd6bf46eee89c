"""
VendFA - Main Entry Point

Interactive console for the coin-operated vending machine DFA.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO
from uuid import uuid4

from vendfa import __version__
from vendfa.app.display import format_history, render_screen
from vendfa.app.errors import InvalidInputError, VendfaError
from vendfa.app.logging import Loggers, set_session_id, setup_logging
from vendfa.app.settings import LOG_LEVELS, Settings, load_settings, validate_settings
from vendfa.domain.engines import VendingMachineEngine

logger = Loggers.console()

HELP_TEXT = """Commands:
  1, 2      insert a coin of that value
  reset     return the machine to S0
  history   show the transaction log
  state     show the current screen
  help      show this message
  quit      exit"""

DISPENSE_BANNER = "*** Product dispensed! Enjoy your item! Total paid: {amount} ***"


class Application:
    """Console session around a single engine instance."""

    def __init__(
        self,
        settings: Settings,
        engine: VendingMachineEngine | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.settings = settings
        self.session_id = str(uuid4())[:8]
        self.engine = engine if engine is not None else VendingMachineEngine()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._running = False

    def start(self) -> None:
        """Log the session start and validate settings."""
        set_session_id(self.session_id)

        logger.info(
            "Starting VendFA",
            event_type="startup",
            version=__version__,
            session_id=self.session_id,
        )

        for issue in validate_settings(self.settings):
            if issue.startswith("ERROR"):
                logger.error(issue, event_type="config_error")
                raise SystemExit(1)
            logger.warning(issue, event_type="config_warning")

    def run(self) -> None:
        """Read commands until quit or end of input."""
        self._running = True
        self._write(HELP_TEXT)
        self._write(self._screen())

        while self._running:
            self._stdout.write("> ")
            self._stdout.flush()
            line = self._stdin.readline()
            if not line:
                break
            self.handle_command(line)

    def stop(self) -> None:
        """Log the session end."""
        self._running = False
        logger.info(
            "Session ended",
            event_type="shutdown_complete",
            session_id=self.session_id,
            final_state=self.engine.current_state.value,
            total=self.engine.total_amount,
        )

    def handle_command(self, line: str) -> None:
        """Dispatch a single input line."""
        command = line.strip().lower()
        if not command:
            return

        if command in ("quit", "exit", "q"):
            self._running = False
        elif command in ("reset", "r"):
            self.engine.reset()
            self._write(self._screen())
        elif command in ("history", "h"):
            self._write("\n".join(format_history(self.engine.history, self.settings.display)))
        elif command in ("state", "s"):
            self._write(self._screen())
        elif command in ("help", "?"):
            self._write(HELP_TEXT)
        else:
            self._insert(command)

    def _insert(self, raw: str) -> None:
        try:
            result = self.engine.insert_coin(raw)
        except InvalidInputError as e:
            self._write(f"Rejected: {e}")
            return

        self._write(self._screen())
        if result.dispensed:
            self._write(DISPENSE_BANNER.format(
                amount=f"{self.settings.display.currency_symbol}{result.total_amount}",
            ))

    def _screen(self) -> str:
        return render_screen(
            self.engine.get_state_info(),
            self.engine.history,
            self.settings.display,
        )

    def _write(self, text: str) -> None:
        self._stdout.write(text + "\n")


def run_app(app: Application) -> int:
    """Drive an application through start, run and stop; return exit code."""
    try:
        app.start()
        app.run()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(
            "Fatal error",
            event_type="fatal_error",
            error=str(e),
            exc_info=True,
        )
        return 1
    finally:
        app.stop()

    return 0


def main() -> None:
    """Main entry point."""
    try:
        settings = load_settings()
    except VendfaError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)

    level = settings.log_level if settings.log_level.upper() in LOG_LEVELS else "INFO"
    setup_logging(
        level=level,
        json_output=settings.json_logs,
        log_file=settings.log_file,
    )

    sys.exit(run_app(Application(settings)))


if __name__ == "__main__":
    main()
