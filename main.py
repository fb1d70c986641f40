import sys
import time

from ApiBlame.argparser import argparser
from ApiBlame.util.logging import setup_logging


def main(argv=None):
    args = argparser.parse_args(argv)
    logger = setup_logging("main", args.verbose)

    start_time = time.time()
    match args.command:
        case "analyze_file":
            from ApiBlame.commands.analyze_file import analyze_file

            result = analyze_file(args, logger)
        case "analyze_repository":
            from ApiBlame.commands.analyze_repository import analyze_repository

            result = analyze_repository(args, logger)
        case _:
            raise ValueError(f"Unknown command {args.command}")

    end_time = time.time()
    logger.debug(f"Analysis took {end_time - start_time}s")
    return result


if __name__ == "__main__":
    main(sys.argv[1:])
