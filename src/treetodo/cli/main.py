# src/treetodo/cli/main.py

"""
CLI entrypoint.

One invocation = one load -> dispatch -> (save) cycle:
- initializes logging from settings,
- loads the todo file into AppState,
- runs the verb, prints its output,
- saves only when the command changed something.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state, save_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_SAVE_FAILED = 2


def run(argv: list[str] | None = None, *, settings=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(console_level=console_level, log_file=getattr(settings, "log_file", None))

    state = create_initial_state(settings=settings)
    result = registry.handle(state, list(argv))

    if result.error:
        print(result.output, file=sys.stderr)
        return EXIT_USER_ERROR

    if result.changed:
        try:
            save_state(state)
        except OSError:
            logger.exception("Failed to save todos to %s", state.data_file)
            print(f"Error: Failed to save todos to {state.data_file}", file=sys.stderr)
            return EXIT_SAVE_FAILED

    print(result.output)
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
