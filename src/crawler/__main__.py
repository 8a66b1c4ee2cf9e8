from pathlib import Path
import logging
import os
import sys

from dotenv import load_dotenv
from rich.console import Console

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from crawler.bootstrap import create_state_machine
from crawler.presentation.console_choices import ConsoleChoiceSource
from crawler.presentation.game_loop import run_game_loop


def _configure_logging() -> None:
    level_name = os.getenv("CRAWLER_LOG_LEVEL", "WARNING").strip().upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Menus: type the number shown next to an option and press ENTER.")
    print("- In combat: pick a move by its index, or choose Inventory / Run Away.")
    print("- Reproducible runs: set CRAWLER_SEED to an integer.")


def main():
    load_dotenv()
    _configure_logging()
    try:
        console = Console()
        engine = create_state_machine(ConsoleChoiceSource(console))
        run_game_loop(engine, console=console)
    except KeyboardInterrupt:
        print("\nSession ended.")
    except Exception as exc:
        logging.getLogger(__name__).debug("Session crashed", exc_info=True)
        print("An unexpected error occurred. The game closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()


if __name__ == "__main__":
    main()
