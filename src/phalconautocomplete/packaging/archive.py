"""Unpacking of the upstream release and packing of the plugin jar.

The upstream archive is a GitHub tag snapshot: one top-level directory
(``ide-stubs-<version>/``) holding a ``src`` tree of stub files. The plugin
jar is a plain deflated zip with ``src/`` and ``META-INF/`` at its root.
"""

import logging
import os
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Iterable, List

from phalconautocomplete.core.errors import ArchiveError, FileOperationError, StructureError
from phalconautocomplete.core.settings import META_DIR_NAME, SOURCE_DIR_NAME

logger = logging.getLogger(__name__)


def extract_archive(zip_path: Path, destination: Path) -> Path:
    """Extract every member of ``zip_path`` into ``destination``.

    Raises:
        ArchiveError: If the file is missing, unreadable, not a valid ZIP file
            or holds member data that cannot be decompressed
    """
    logger.info(f"Extracting {zip_path}")
    try:
        destination.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path, "r") as zipf:
            zipf.extractall(destination)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Failed to unzip {zip_path}: not a valid ZIP file") from e
    except (zlib.error, EOFError, RuntimeError, NotImplementedError) as e:
        # Damaged member data, encrypted or unsupported compression
        raise ArchiveError(f"Failed to unzip {zip_path}: {e}") from e
    except OSError as e:
        raise ArchiveError(f"Failed to unzip {zip_path}: {e}") from e
    return destination


def find_release_root(extract_dir: Path) -> Path:
    """Return the single top-level directory produced by extraction.

    Raises:
        StructureError: If there is no such directory, or more than one
    """
    candidates = sorted(p for p in extract_dir.iterdir() if p.is_dir())
    if not candidates:
        raise StructureError(f"No directory found in extracted archive {extract_dir}")
    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        raise StructureError(f"Expected one top-level directory in extracted archive, found: {names}")
    return candidates[0]


def relocate_sources(release_root: Path, target: Path) -> int:
    """Move every direct child of ``release_root/src`` into ``target``.

    Returns:
        Number of moved entries

    Raises:
        StructureError: If the release has no ``src`` directory
        FileOperationError: If a move fails
    """
    source = release_root / SOURCE_DIR_NAME
    if not source.is_dir():
        raise StructureError(f"Source directory not found in {release_root}")
    logger.info(f"Extracted directory found at {release_root}")

    moved = 0
    try:
        target.mkdir(parents=True, exist_ok=True)
        for child in sorted(source.iterdir()):
            shutil.move(str(child), str(target / child.name))
            moved += 1
    except (OSError, shutil.Error) as e:
        raise FileOperationError(f"Failed to move source files: {e}") from e

    logger.debug(f"Moved {moved} entries from {source} to {target}")
    return moved


def _walk_member(root: Path, member: str) -> Iterable[Path]:
    top = root / member
    yield top
    for dirpath, dirnames, filenames in os.walk(top):
        dirnames.sort()
        for name in dirnames:
            yield Path(dirpath) / name
        for name in sorted(filenames):
            yield Path(dirpath) / name


def create_jar(root: Path, jar_path: Path, members: Iterable[str] = (SOURCE_DIR_NAME, META_DIR_NAME)) -> Path:
    """Zip the given top-level trees of ``root`` into ``jar_path``.

    Archive names are relative to ``root`` with ``/`` separators; directory
    entries are written too, as ``zip -r`` does.

    Raises:
        ArchiveError: If a member is missing or the archive cannot be written
    """
    members = list(members)
    for member in members:
        if not (root / member).is_dir():
            raise ArchiveError(f"Failed to create JAR file: {member} not found in {root}")

    try:
        with zipfile.ZipFile(jar_path, "w", compression=zipfile.ZIP_DEFLATED) as zipf:
            for member in members:
                for path in _walk_member(root, member):
                    zipf.write(path, path.relative_to(root).as_posix())
    except (OSError, zipfile.BadZipFile) as e:
        jar_path.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to create JAR file: {e}") from e

    logger.info(f"Created JAR file {jar_path.name}")
    return jar_path


def list_entries(jar_path: Path) -> List[str]:
    """Return the member names of a jar."""
    with zipfile.ZipFile(jar_path, "r") as zipf:
        return zipf.namelist()
