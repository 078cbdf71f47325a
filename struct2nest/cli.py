from __future__ import annotations

import logging
import sys
from typing import Sequence

from .codegen.cli_integration import create_parser, handle_convert_command
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the struct2nest command line.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv``.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger.debug("Parsed arguments: %s", args)

    return handle_convert_command(args)


if __name__ == "__main__":
    sys.exit(main())
