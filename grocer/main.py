import argparse
import logging
from pathlib import Path

from grocer.commands.dispatcher import AppContext, Dispatcher
from grocer.events.console_observers import attach
from grocer.infra.paths import GROCERIES_FILE, LOG_PATH
from grocer.utilities.config import LOG_LEVEL


def setup_logging(level: str, log_path: Path):
    """Log to a file so the console only shows command results."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_path),
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Track groceries, calories and your profile from the terminal.")
    parser.add_argument("--data-file", type=Path, default=GROCERIES_FILE, help="JSON file holding your groceries")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--log-file", type=Path, default=LOG_PATH, help="Where to write the log")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    context = AppContext.create(data_file=args.data_file)
    attach(context.bus)
    dispatcher = Dispatcher(context)

    print("Hello from grocer! Type 'help' to see what you can do.")
    while dispatcher.is_running:
        try:
            line = input(f"[{dispatcher.mode.value}] > ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        dispatcher.run(line)


if __name__ == "__main__":
    main()
