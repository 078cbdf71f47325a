"""Utility functions for locating and loading Go source files.

This module provides functions for listing input directories and reading
source text with proper error handling.
"""

from pathlib import Path

from .logging_config import get_logger

logger = get_logger(__name__)


class SourceLoaderError(Exception):
    """Custom exception for source loading errors."""

    pass


class OutputError(Exception):
    """Raised when the output location cannot be prepared."""

    pass


def list_source_files(directory: str | Path, pattern: str = "*") -> list[Path]:
    """List regular files directly inside ``directory``.

    Args:
        directory: Input directory.
        pattern: Glob pattern the file names must match.

    Returns:
        Matching files sorted by name.

    Raises:
        SourceLoaderError: If the directory is missing or unreadable.
    """
    directory = Path(directory)
    logger.debug(f"Listing source files in {directory}")

    if not directory.is_dir():
        logger.error(f"Input directory not found: {directory}")
        raise SourceLoaderError(f"Input directory not found: {directory}")

    try:
        files = sorted(p for p in directory.glob(pattern) if p.is_file())
    except OSError as e:
        logger.error(f"Error reading directory {directory}: {e}", exc_info=True)
        raise SourceLoaderError(f"Error reading directory {directory}: {e}") from e

    logger.debug(f"Found {len(files)} source file(s) in {directory}")
    return files


def load_source(file_path: str | Path) -> str:
    """Read a source file as UTF-8 text.

    Raises:
        SourceLoaderError: If the file cannot be read or decoded.
    """
    file_path = Path(file_path)
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.error(f"File is not valid UTF-8 text: {file_path}")
        raise SourceLoaderError(f"File is not valid UTF-8 text: {file_path}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SourceLoaderError(f"Error reading file {file_path}: {e}") from e


def ensure_directory(directory: str | Path) -> Path:
    """Create ``directory`` (and parents) if it does not exist yet.

    Raises:
        OutputError: If the path exists as a file or cannot be created.
    """
    directory = Path(directory)
    if not directory.exists():
        logger.info(f"Creating output directory {directory}")
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {directory}: {e}")
        raise OutputError(f"Cannot create output directory {directory}: {e}") from e
    return directory
