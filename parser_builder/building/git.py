"""
Thin wrapper around `git clone` for grammar repositories.
"""

import logging
import os
import shutil
import subprocess  # nosec B404
from pathlib import Path
from typing import Optional, Union

from parser_builder.exceptions import CloneError

logger = logging.getLogger(__name__)


def is_non_empty_dir(path: Union[str, Path]) -> bool:
    path = Path(path)
    return path.is_dir() and any(path.iterdir())


def clone_repository(
    url: str,
    destination: Union[str, Path],
    git_path: Optional[str] = None,
    depth: Optional[int] = 1
) -> Path:
    """
    Clone a repository into `destination`.

    Args:
        url: Repository URL
        destination: Target checkout directory; must be missing or empty
        git_path: Explicit git executable (defaults to the one on PATH)
        depth: Shallow clone depth, None for full history

    Returns:
        Path of the checkout

    Raises:
        CloneError: If the destination is occupied or git fails
    """
    destination = Path(destination)
    if destination.exists() and not destination.is_dir():
        raise CloneError(url, f"destination {destination} exists and is not a directory")
    if is_non_empty_dir(destination):
        raise CloneError(url, f"destination {destination} already exists and is not empty")

    git = git_path or shutil.which("git")
    if not git:
        raise CloneError(url, "git not found in PATH")

    cmd = [git, "clone"]
    if depth:
        cmd += ["--depth", str(depth)]
    cmd += [url, str(destination)]

    # Never block on a credential prompt for private or deleted repositories.
    env = dict(os.environ, GIT_TERMINAL_PROMPT="0")

    logger.info(f"Cloning {url} into {destination}")
    try:
        result = subprocess.run(  # nosec B603
            cmd,
            capture_output=True,
            text=True,
            env=env,
        )
    except OSError as e:
        raise CloneError(url, str(e)) from e

    if result.returncode != 0:
        raise CloneError(url, result.stderr.strip() or f"git exited with code {result.returncode}")

    return destination
