import concurrent.futures
import logging

from tqdm import tqdm

from ApiBlame.blame import make_blame
from ApiBlame.commands.analyze_file import analyze_source_file
from ApiBlame.report import FileUsage, RepositoryUsage
from ApiBlame.util.source_file_iterator import SourceFileIterator


def analyze_repository(args, logger: logging.Logger) -> RepositoryUsage:
    report = RepositoryUsage(repository=args.repository)
    files = SourceFileIterator(args.repository, args.extensions)

    def analyze(file: str) -> FileUsage:
        # one oracle per file, so blame data is released with the file's walker
        return analyze_source_file(args.repository, file, make_blame(args.blame))

    def record_failure(file: str, error: Exception):
        logger.error(f"Error analyzing {file}: {error}")
        report.failed_files.append(file)

    if args.workers > 1:
        files.collect()
        with concurrent.futures.ThreadPoolExecutor(max_workers=args.workers) as executor:
            futures = {executor.submit(analyze, file): file for file in files.results}
            completed = tqdm(
                concurrent.futures.as_completed(futures),
                total=len(files),
                desc="Analyzed files",
            )
            for future in completed:
                try:
                    report.files.append(future.result())
                except Exception as e:
                    if args.fail_fast:
                        executor.shutdown(wait=False, cancel_futures=True)
                        raise
                    record_failure(futures[future], e)
    else:
        for file in files:
            try:
                report.files.append(analyze(file))
            except Exception as e:
                if args.fail_fast:
                    raise
                record_failure(file, e)

    report.files.sort(key=lambda usage: usage.file)
    report.failed_files.sort()

    paths = report.save(args.output)
    total_calls = sum(usage.total_calls() for usage in report.files)
    logger.info(
        f"Analyzed {len(report.files)} files with {total_calls} external calls, "
        f"{len(report.failed_files)} failed"
    )
    logger.debug(f"Report written to {paths['json']}")
    return report
