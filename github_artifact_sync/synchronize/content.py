"""Full-replace mirroring of an input directory into a working tree subdirectory."""

import shutil
from pathlib import Path

import structlog

from github_artifact_sync.exceptions import ConfigError
from github_artifact_sync.utils.constants import GIT_DIRECTORY_NAME

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def resolve_destination(working_tree: Path, destination: str) -> Path:
    """Resolve the destination subdirectory inside the working tree.

    Raises:
        ConfigError: If the destination escapes the working tree or points at
            the repository metadata directory.
    """
    root = working_tree.resolve()
    target = (root / (destination or ".")).resolve()
    if target != root and root not in target.parents:
        raise ConfigError(f"{destination!r} is outside of the repository", context="failed to go to subdirectory")
    if GIT_DIRECTORY_NAME in target.relative_to(root).parts:
        raise ConfigError(f"{destination!r} points into {GIT_DIRECTORY_NAME}", context="failed to go to subdirectory")
    return target


def remove_destination(root: Path, target: Path) -> None:
    """Remove everything at the destination; at the repository root, keep only the git directory."""
    if target == root:
        for child in root.iterdir():
            if child.name == GIT_DIRECTORY_NAME:
                continue
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    elif target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    elif target.exists() or target.is_symlink():
        target.unlink()


def replace_directory_contents(input_path: Path, working_tree: Path, destination: str) -> Path:
    """Make the destination subdirectory an exact copy of the input directory.

    The destination is removed first and intermediate directories are
    created, so files left over from a previous run never survive. Content
    outside the destination is not touched.

    Returns:
        The resolved destination path.
    """
    if not input_path.is_dir():
        raise ConfigError(f"input path {str(input_path)!r} is not a directory", context="copy files")
    root = working_tree.resolve()
    target = resolve_destination(root, destination)
    logger.debug("Removing old artifacts", destination=str(target.relative_to(root)))
    remove_destination(root, target)
    target.mkdir(parents=True, exist_ok=True)
    logger.debug("Copying artifacts", input_path=str(input_path), destination=str(target.relative_to(root)))
    shutil.copytree(
        input_path,
        target,
        symlinks=True,
        ignore=shutil.ignore_patterns(GIT_DIRECTORY_NAME),
        dirs_exist_ok=True,
    )
    return target
