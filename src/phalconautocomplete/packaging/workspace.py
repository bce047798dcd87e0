"""Temporary workspace and output directory handling."""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from phalconautocomplete.core.errors import FileOperationError, WorkspaceError

logger = logging.getLogger(__name__)


@contextmanager
def workspace(prefix: str = "phalconautocomplete-", parent: Optional[Path] = None) -> Iterator[Path]:
    """
    Create a uniquely named temporary directory and remove it on exit.

    On a clean exit a failed removal raises FileOperationError. When the body
    raised, removal is best effort and the original exception propagates.
    """
    try:
        path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    except OSError as e:
        raise WorkspaceError(f"Failed to create temporary directory: {e}") from e
    if not path.is_dir():
        raise WorkspaceError("Failed to create temporary directory")
    logger.info(f"Created temporary directory {path}")

    try:
        yield path
    except BaseException:
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning(f"Temporary directory {path} could not be fully removed")
        raise

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FileOperationError(f"Failed to clean up temporary files: {e}") from e
    logger.debug(f"Removed temporary directory {path}")


def ensure_output_dir(path: Path) -> Path:
    """Create the output directory if it is missing."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as e:
        raise WorkspaceError(f"Failed to create dist directory {path}: not a directory") from e
    except OSError as e:
        raise WorkspaceError(f"Failed to create dist directory {path}: {e}") from e
    return path
