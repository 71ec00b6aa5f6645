from dataclasses import dataclass, field
from typing import Optional, Set

DEFAULT_CATALOG_URL = "https://github.com/tree-sitter/tree-sitter/wiki/List-of-parsers"
DEFAULT_THREADS = 10


@dataclass(frozen=True)
class ParserDescriptor:
    language: str
    url: str


@dataclass
class BuilderConfig:
    output_dir: str = "./shared_libs/"
    source_dir: str = "./shared_libs_src/"
    config_path: str = "./config.json"
    threads: int = DEFAULT_THREADS
    languages: Set[str] = field(default_factory=set)
    catalog_url: str = DEFAULT_CATALOG_URL
    log_file: Optional[str] = "log/output.log"
    timeout: int = 30
