import logging
import re
import threading
from pathlib import Path
from typing import Callable, Optional, Set, Union

from parser_builder.building.compiler import GrammarCompiler
from parser_builder.building.git import clone_repository
from parser_builder.building.registry import LanguageRegistry
from parser_builder.config.builder_config import BuilderConfig, ParserDescriptor
from parser_builder.exceptions import BuildError, PathConflictError, RegistryError

StatusCallback = Callable[[ParserDescriptor, str], None]


def language_slug(language: str) -> str:
    slug = re.sub(r"[^a-z0-9_.+-]", "_", language.strip().lower())
    return slug or "unnamed"


def repo_destination(source_dir: Union[str, Path], language: str) -> Path:
    return Path(source_dir) / f"tree-sitter-{language_slug(language)}"


def artifact_path(output_dir: Union[str, Path], language: str) -> Path:
    return Path(output_dir) / f"lib{language_slug(language)}.so"


class BuildEngine:
    """
    Clones and builds a single grammar. One instance is shared by every worker of a run.
    """

    def __init__(
        self,
        config: BuilderConfig,
        compiler: Optional[GrammarCompiler] = None,
        registry: Optional[LanguageRegistry] = None,
        clone: Callable = clone_repository,
        status_callback: Optional[StatusCallback] = None
    ):
        self.config = config
        self.compiler = compiler or GrammarCompiler()
        self.registry = registry or LanguageRegistry(config.config_path)
        self.clone = clone
        self.status_callback = status_callback
        self._claimed: Set[Path] = set()
        self._claim_lock = threading.Lock()

    def claim_destination(self, descriptor: ParserDescriptor) -> Path:
        """Reserve the checkout path for `descriptor`; a second claim on the same path fails."""
        destination = repo_destination(self.config.source_dir, descriptor.language).resolve()
        with self._claim_lock:
            if destination in self._claimed:
                raise PathConflictError(descriptor.url, str(destination))
            self._claimed.add(destination)
        return destination

    def process(self, descriptor: ParserDescriptor) -> Path:
        """
        Clone, build and register one grammar.

        Args:
            descriptor: Language and repository to build

        Returns:
            Path of the built shared library

        Raises:
            CloneError: If the checkout path is taken or git fails
            BuildError: If compilation fails or produces nothing
        """
        lang = descriptor.language
        destination = self.claim_destination(descriptor)

        self._status(descriptor, f"Cloning {descriptor.url}")
        Path(self.config.source_dir).mkdir(parents=True, exist_ok=True)
        repo_dir = Path(self.clone(descriptor.url, destination))

        self._status(descriptor, f"Cloned {lang}. Building grammar")
        output = artifact_path(self.config.output_dir, lang)
        built = Path(self.compiler.build(lang, repo_dir, output))
        if not built.is_file():
            raise BuildError(lang, f"artifact missing at {built}")

        try:
            self.registry.register(repo_dir, built)
        except RegistryError as e:
            logging.error(f"failed to create config entry for {lang} : {e}")

        self._status(descriptor, f"Built grammar for {lang}")
        return built

    def _status(self, descriptor: ParserDescriptor, message: str) -> None:
        logging.debug(f"[{descriptor.language}] {message}")
        if self.status_callback:
            self.status_callback(descriptor, message)
