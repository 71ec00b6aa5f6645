"""
Unit tests for parser_builder/main.py
Tests the fetch, filter and build pipeline with mocked collaborators.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from parser_builder.config.builder_config import ParserDescriptor
from parser_builder.exceptions import FetchError
from parser_builder.main import run_builder


def fake_engine(fail_urls=()):
    engine = MagicMock()

    def process(descriptor):
        if descriptor.url in fail_urls:
            raise RuntimeError(f"build failed for {descriptor.language}")
        return f"/libs/lib{descriptor.language.lower()}.so"

    engine.process.side_effect = process
    return engine


class TestRunBuilder:
    """Tests for run_builder function."""

    def test_builds_whole_catalog(self, builder_config, mock_http_response):
        engine = fake_engine()

        result = run_builder(builder_config, http_client=MagicMock(return_value=mock_http_response), engine=engine)

        assert result.total_workers == 3
        assert result.successful_workers == 3
        assert engine.process.call_count == 3

    def test_language_filter(self, builder_config, mock_http_response):
        builder_config.languages = {"go", "RUST"}
        engine = fake_engine()

        result = run_builder(builder_config, http_client=MagicMock(return_value=mock_http_response), engine=engine)

        built = sorted(call.args[0].language for call in engine.process.call_args_list)
        assert built == ["Go", "Rust"]
        assert result.total_workers == 2

    def test_full_language_filter_matches_no_filter(self, builder_config, mock_http_response):
        builder_config.languages = {"python", "go", "rust"}

        result = run_builder(builder_config, http_client=MagicMock(return_value=mock_http_response), engine=fake_engine())

        assert result.total_workers == 3

    def test_filter_matches_nothing(self, builder_config, mock_http_response, caplog):
        builder_config.languages = {"cobol"}
        engine = fake_engine()

        result = run_builder(builder_config, http_client=MagicMock(return_value=mock_http_response), engine=engine)

        assert result.total_workers == 0
        assert result.failed_workers == 0
        engine.process.assert_not_called()
        assert "No parsers match the requested languages: cobol" in caplog.text

    def test_failures_are_counted(self, builder_config, mock_http_response):
        engine = fake_engine(fail_urls={"https://github.com/tree-sitter/tree-sitter-go"})

        result = run_builder(builder_config, http_client=MagicMock(return_value=mock_http_response), engine=engine)

        assert result.successful_workers == 2
        assert result.failed_workers == 1
        assert result.failures()[0].descriptor == ParserDescriptor(
            "Go", "https://github.com/tree-sitter/tree-sitter-go"
        )

    def test_fetch_error_is_fatal(self, builder_config):
        engine = fake_engine()
        http_client = MagicMock(side_effect=requests.exceptions.ConnectionError("no route to host"))

        with pytest.raises(FetchError):
            run_builder(builder_config, http_client=http_client, engine=engine)

        engine.process.assert_not_called()

    def test_progress_callback_forwarded(self, builder_config, mock_http_response):
        seen = []

        run_builder(
            builder_config,
            http_client=MagicMock(return_value=mock_http_response),
            engine=fake_engine(),
            progress_callback=lambda result, completed, total: seen.append((completed, total)),
        )

        assert seen == [(1, 3), (2, 3), (3, 3)]

    def test_status_callback_reaches_default_engine(self, builder_config, mock_http_response):
        def on_status(descriptor, message):
            pass

        with patch("parser_builder.main.BuildEngine", return_value=fake_engine()) as mock_engine_cls:
            result = run_builder(
                builder_config,
                http_client=MagicMock(return_value=mock_http_response),
                status_callback=on_status,
            )

        mock_engine_cls.assert_called_once_with(builder_config, status_callback=on_status)
        assert result.successful_workers == 3
