import logging
from typing import Callable, Optional

import requests

from parser_builder.catalog.fetcher import fetch_catalog, filter_descriptors
from parser_builder.config.builder_config import BuilderConfig
from parser_builder.core.engine import BuildEngine, StatusCallback
from parser_builder.core.parallel import ParallelBuilder, ParallelBuildResult, WorkerResult


def run_builder(
    config: BuilderConfig,
    http_client: Callable = requests.get,
    engine: Optional[BuildEngine] = None,
    progress_callback: Optional[Callable[[WorkerResult, int, int], None]] = None,
    status_callback: Optional[StatusCallback] = None
) -> ParallelBuildResult:
    """
    Fetch the parser catalog, filter it and build every matching grammar.

    `status_callback` receives per-stage messages (cloning, building) from each task;
    it is only used when no `engine` is given.

    Raises:
        FetchError: If the catalog cannot be downloaded or parsed
    """
    logging.info(f"Starting parser builder with catalog: {config.catalog_url}")

    descriptors = fetch_catalog(config.catalog_url, http_client=http_client, timeout=config.timeout)
    selected = filter_descriptors(descriptors, config.languages)

    if config.languages and not selected:
        logging.warning(f"No parsers match the requested languages: {', '.join(sorted(config.languages))}")
    elif config.languages:
        logging.info(f"Selected {len(selected)} of {len(descriptors)} parsers")

    engine = engine or BuildEngine(config, status_callback=status_callback)
    builder = ParallelBuilder(engine.process, max_workers=config.threads)
    return builder.run(selected, progress_callback=progress_callback)
