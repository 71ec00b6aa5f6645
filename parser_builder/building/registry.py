"""
Language registry: records built grammars in a JSON config file.

The file maps grammar names to their shared library and primary file extension:

    {"known_languages": {"python": {"path": "shared_libs/libpython.so", "extension": "py"}}}
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from parser_builder.building.compiler import find_file
from parser_builder.exceptions import RegistryError

logger = logging.getLogger(__name__)

GRAMMAR_MANIFEST = "tree-sitter.json"


class GrammarEntry(BaseModel):
    path: str
    extension: str = ""


class LanguageRegistryFile(BaseModel):
    known_languages: Dict[str, GrammarEntry] = {}

    model_config = ConfigDict(extra="allow")


class GrammarManifestItem(BaseModel):
    name: Optional[str] = None
    file_types: List[str] = Field(default_factory=list, alias="file-types")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GrammarManifest(BaseModel):
    grammars: List[GrammarManifestItem] = []

    model_config = ConfigDict(extra="ignore")


class LanguageRegistry:
    """
    Thread-safe writer for the known_languages config file.
    """

    def __init__(self, config_path: Union[str, Path]):
        self.config_path = Path(config_path)
        self._lock = threading.Lock()

    def load(self) -> LanguageRegistryFile:
        if not self.config_path.exists():
            return LanguageRegistryFile()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                return LanguageRegistryFile.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise RegistryError(f"Cannot read language registry {self.config_path}: {e}") from e

    def save(self, registry: LanguageRegistryFile) -> None:
        tmp_path = self.config_path.with_name(self.config_path.name + ".tmp")
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(registry.model_dump_json(indent=2))
            os.replace(tmp_path, self.config_path)
        except OSError as e:
            try:
                tmp_path.unlink()
            except OSError:
                pass  # the tmp file was never created
            raise RegistryError(f"Cannot write language registry {self.config_path}: {e}") from e

    def register(self, repo_dir: Union[str, Path], artifact_path: Union[str, Path]) -> List[str]:
        """
        Record every grammar declared by the checkout's tree-sitter.json.

        Args:
            repo_dir: Local checkout of the grammar repository
            artifact_path: Shared library built from that checkout

        Returns:
            Names of the registered grammars

        Raises:
            RegistryError: If the manifest is missing or unreadable, or the registry file is corrupt
        """
        manifest = self._read_manifest(repo_dir)

        entries = {}
        for grammar in manifest.grammars:
            if not grammar.name:
                continue
            extension = grammar.file_types[0] if grammar.file_types else ""
            entries[grammar.name] = GrammarEntry(path=str(artifact_path), extension=extension)

        with self._lock:
            registry = self.load()
            registry.known_languages.update(entries)
            self.save(registry)

        logger.info(f"Registered {sorted(entries)} in {self.config_path}")
        return sorted(entries)

    def _read_manifest(self, repo_dir: Union[str, Path]) -> GrammarManifest:
        manifest_path = find_file(repo_dir, GRAMMAR_MANIFEST)
        if manifest_path is None:
            raise RegistryError(f"{GRAMMAR_MANIFEST} not found in {repo_dir}")

        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                return GrammarManifest.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise RegistryError(f"Invalid {GRAMMAR_MANIFEST} at {manifest_path}: {e}") from e
