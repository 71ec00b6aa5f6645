import logging
import os
import sys
from typing import List, Optional

from cli.argparser import parse_args
from parser_builder.config.builder_config import ParserDescriptor
from parser_builder.config.config_utils import build_config
from parser_builder.core.parallel import WorkerResult
from parser_builder.core.summary import format_progress, format_summary
from parser_builder.exceptions import FetchError
from parser_builder.main import run_builder

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_FATAL = 2

LOG_FORMAT = "%(levelname)s [%(asctime)s] - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[str], verbose: bool = False) -> None:
    """
    Log everything from INFO up to `log_file`, and warnings (or INFO when verbose) to the console.
    """
    handlers: List[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.INFO if verbose else logging.WARNING)
    handlers.append(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    config = build_config(args)

    failed = 0

    def print_progress(result: WorkerResult, completed: int, total: int) -> None:
        nonlocal failed
        if not result.succeeded:
            failed += 1
        print(format_progress(result, completed, total, failed))

    def print_status(descriptor: ParserDescriptor, message: str) -> None:
        print(f"  {descriptor.language}: {message}")

    try:
        result = run_builder(
            config,
            progress_callback=print_progress,
            status_callback=print_status if args.verbose else None,
        )
    except FetchError as e:
        print(f"[!] Error scraping parsers: {e}", file=sys.stderr)
        return EXIT_FATAL
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return EXIT_FATAL

    print(format_summary(result, show_languages=args.by_language))
    return EXIT_TASK_FAILED if result.failed_workers else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
