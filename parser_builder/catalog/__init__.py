"""Parser catalog download and filtering."""

from parser_builder.catalog.fetcher import fetch_catalog, filter_descriptors, parse_catalog

__all__ = ["fetch_catalog", "filter_descriptors", "parse_catalog"]
