"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from parser_builder.config.builder_config import BuilderConfig, ParserDescriptor  # noqa: E402


CATALOG_HTML = """
<html>
  <body>
    <div class="header"><ul><li><a href="/login">Sign in</a></li></ul></div>
    <div class="markdown-body">
      <h2>Available parsers</h2>
      <ul>
        <li><a href="https://github.com/tree-sitter/tree-sitter-python">Python</a> (maintained)</li>
        <li><a href="https://github.com/tree-sitter/tree-sitter-go">Go</a></li>
        <li><a href="https://github.com/tree-sitter/tree-sitter-rust">Rust</a></li>
        <li>Planned: Cobol</li>
        <li><a href="https://github.com/tree-sitter/tree-sitter-go">Go</a></li>
      </ul>
    </div>
  </body>
</html>
"""


@pytest.fixture
def catalog_html():
    """Minimal copy of the tree-sitter wiki parser list."""
    return CATALOG_HTML


@pytest.fixture
def sample_descriptors():
    """Catalog of three parsers."""
    return [
        ParserDescriptor(language="python", url="urlA"),
        ParserDescriptor(language="go", url="urlB"),
        ParserDescriptor(language="rust", url="urlC"),
    ]


@pytest.fixture
def builder_config(tmp_path):
    """Builder configuration rooted in a temporary directory."""
    return BuilderConfig(
        output_dir=str(tmp_path / "shared_libs"),
        source_dir=str(tmp_path / "shared_libs_src"),
        config_path=str(tmp_path / "config.json"),
        threads=2,
        log_file=None,
    )


@pytest.fixture
def mock_http_response(catalog_html):
    """Mock requests response serving the sample catalog."""
    response = MagicMock()
    response.status_code = 200
    response.text = catalog_html
    response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def grammar_checkout(tmp_path):
    """Fake grammar repository with parser.c, scanner.c and tree-sitter.json."""
    repo = tmp_path / "checkout"
    src = repo / "src"
    (src / "tree_sitter").mkdir(parents=True)
    (src / "parser.c").write_text("int tree_sitter_demo(void) { return 0; }\n")
    (src / "scanner.c").write_text("int scanner(void) { return 0; }\n")
    (src / "tree_sitter" / "parser.h").write_text("")
    (repo / "tree-sitter.json").write_text(
        '{"grammars": [{"name": "demo", "scope": "source.demo", "file-types": ["demo", "dm"]}]}'
    )
    return repo
