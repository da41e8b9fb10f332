##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other ShelfDB
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to ShelfDB.
##############################################################################

"""
Main entry point into the ShelfDB command line.
"""

import logging
import sys
import traceback

from shelfdb.cli.argparse_main import build_main_parser
from shelfdb.common.enums import ReturnCode
from shelfdb.log_formatter import setup_logging


LOG = logging.getLogger("shelfdb")


def main():
    """
    Entry point for the ShelfDB command-line interface (CLI).

    Parses the command line, sets up logging and runs the selected command.
    Any error raised by the command is logged and turned into exit code 1.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return ReturnCode.ERROR
    args = parser.parse_args()

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=True)

    try:
        args.func(args)
        # Top of the program stack; every failure becomes an exit code.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(ReturnCode.ERROR)

    sys.exit(ReturnCode.OK)


if __name__ == "__main__":
    main()
