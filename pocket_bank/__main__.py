#!/usr/bin/env python3
"""Main entry point for the Pocket Bank teller session"""

import sys

from pocket_bank.config import get_config
from pocket_bank.logging_config import setup_logging, log_action
from pocket_bank.session import Session


def main() -> int:
    """Run one teller session and return the process exit status"""
    config = get_config()
    logger = setup_logging(config.log_level, config.log_format, config.log_file)

    session = Session(config=config)
    log_action(logger, "info", "Session started", action="start")

    try:
        session.run()
    except (EOFError, KeyboardInterrupt):
        print()
        log_action(logger, "error", "Input closed before the session ended", action="abort")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
