import logging
import os
from typing import Optional

from ApiBlame.blame import BlameOracle, make_blame
from ApiBlame.report import FileUsage
from ApiBlame.sca import APIUseWalker, parse_file


def analyze_source_file(
    repository: str, file: str, blame: Optional[BlameOracle] = None
) -> FileUsage:
    tree = parse_file(os.path.join(repository, file))
    walker = APIUseWalker(repository, file, blame)
    walker.walk(tree)
    return FileUsage(file=file, uses=walker.finalize())


def analyze_file(args, logger: logging.Logger) -> FileUsage:
    if not args.file:
        raise ValueError("analyze_file needs a --file to analyze")

    logger.debug(f"Analyzing {args.file} in {args.repository}")
    usage = analyze_source_file(args.repository, args.file, make_blame(args.blame))
    print(usage.model_dump_json(indent=2))
    return usage
