"""
Compiler wrapper that turns a grammar checkout into a shared library.
"""

import logging
import os
import shlex
import shutil
import subprocess  # nosec B404
from pathlib import Path
from typing import List, Optional, Union

from parser_builder.exceptions import BuildError

logger = logging.getLogger(__name__)

COMPILER_CANDIDATES = ("gcc", "cc")
SKIPPED_DIRS = {".git", "node_modules"}


def find_file(root: Union[str, Path], filename: str) -> Optional[Path]:
    """
    Recursively search `root` for a file called `filename`.

    Directories are walked in sorted order so the same checkout always
    yields the same match. Version control and dependency folders are skipped.

    Returns:
        Path of the first match, or None
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
        if filename in filenames:
            return Path(dirpath) / filename
    return None


def resolve_compiler() -> Optional[List[str]]:
    """
    Return the compiler command prefix, e.g. ["/usr/bin/gcc"] or ["/usr/bin/ccache", "gcc"].

    $CC may carry a launcher or flags; only its first token is looked up on PATH.
    """
    override = shlex.split(os.getenv("CC", ""))
    if override:
        path = shutil.which(override[0])
        return [path, *override[1:]] if path else None

    for candidate in COMPILER_CANDIDATES:
        path = shutil.which(candidate)
        if path:
            return [path]
    return None


class GrammarCompiler:
    """Wrapper for the C compiler building tree-sitter grammars."""

    def __init__(self, compiler_path: Optional[str] = None, extra_flags: Optional[List[str]] = None):
        self.compiler_command = [compiler_path] if compiler_path else resolve_compiler()
        self.compiler_path = self.compiler_command[0] if self.compiler_command else None
        self.extra_flags = ["-O2"] if extra_flags is None else list(extra_flags)

    def build_command(self, parser_c: Path, scanner_c: Optional[Path], output_path: Path) -> List[str]:
        cmd = [*self.compiler_command, "-shared", "-fPIC", *self.extra_flags]
        cmd += ["-I", str(parser_c.parent), "-o", str(output_path), str(parser_c)]
        if scanner_c:
            cmd.append(str(scanner_c))
        return cmd

    def build(self, language: str, repo_dir: Union[str, Path], output_path: Union[str, Path]) -> Path:
        """
        Compile the grammar found in `repo_dir` into `output_path`.

        Args:
            language: Language name, used in error messages
            repo_dir: Local checkout of the grammar repository
            output_path: Where the shared library is written

        Returns:
            Path of the produced shared library

        Raises:
            BuildError: If parser.c is missing, no compiler is available or compilation fails
        """
        if not self.compiler_path:
            raise BuildError(language, "no C compiler found in PATH")

        parser_c = find_file(repo_dir, "parser.c")
        if parser_c is None:
            raise BuildError(language, f"parser.c not found in {repo_dir}")
        scanner_c = find_file(repo_dir, "scanner.c")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        cmd = self.build_command(parser_c, scanner_c, output_path)
        logger.info(f"Building grammar for {language}: {' '.join(cmd)}")
        try:
            result = subprocess.run(  # nosec B603
                cmd,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise BuildError(language, str(e)) from e

        if result.returncode != 0:
            raise BuildError(language, result.stderr.strip() or f"compiler exited with code {result.returncode}")

        if not output_path.is_file():
            raise BuildError(language, f"compiler produced no artifact at {output_path}")

        return output_path
