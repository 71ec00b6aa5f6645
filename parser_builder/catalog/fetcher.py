"""
Catalog fetcher for the tree-sitter "List of parsers" wiki page.
Turns the page into (language, repository URL) descriptors.
"""

import logging
from typing import Callable, Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from parser_builder.config.builder_config import ParserDescriptor
from parser_builder.exceptions import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "parser-builder/0.1"


def fetch_catalog(
    url: str,
    http_client: Callable = requests.get,
    timeout: int = 30
) -> List[ParserDescriptor]:
    """
    Download the parser listing and parse it into descriptors.

    Args:
        url: Address of the wiki page
        http_client: Callable with the signature of requests.get
        timeout: Request timeout in seconds

    Returns:
        Descriptors in page order

    Raises:
        FetchError: If the page is unreachable or contains no parsers
    """
    logger.info(f"Fetching parser catalog from {url}")
    try:
        resp = http_client(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FetchError(url, str(e)) from e

    descriptors = parse_catalog(resp.text)
    if not descriptors:
        raise FetchError(url, "no parser entries found in page")

    logger.info(f"Found {len(descriptors)} parsers in catalog")
    return descriptors


def parse_catalog(html: str) -> List[ParserDescriptor]:
    soup = BeautifulSoup(html or "", "html.parser")

    descriptors: List[ParserDescriptor] = []
    seen = set()
    for li in soup.select("div.markdown-body li"):
        link = li.find("a")
        if link is None or not link.get("href"):
            continue

        language = link.get_text(strip=True)
        if not language:
            continue

        descriptor = ParserDescriptor(language=language, url=link["href"].strip())
        # The wiki repeats some rows; identical pairs are built once.
        if descriptor in seen:
            continue
        seen.add(descriptor)
        descriptors.append(descriptor)

    return descriptors


def filter_descriptors(
    descriptors: Iterable[ParserDescriptor],
    languages: Optional[Iterable[str]] = None
) -> List[ParserDescriptor]:
    """Keep descriptors whose language is in `languages` (case-insensitive). No languages keeps all."""
    descriptors = list(descriptors)
    wanted = {name.strip().lower() for name in (languages or []) if name and name.strip()}
    if not wanted:
        return descriptors

    return [d for d in descriptors if d.language.lower() in wanted]
