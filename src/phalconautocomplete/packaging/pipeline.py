"""
Packaging pipeline: turns one upstream stub release into a plugin jar.

Stages run strictly in order and every path is passed explicitly; the
process working directory is never changed. The first failing stage raises
a PackagingError which ends the run, and the workspace is removed on every
exit path.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import requests

from phalconautocomplete.core.config import Settings
from phalconautocomplete.core.errors import FileOperationError
from phalconautocomplete.core.settings import META_DIR_NAME, SOURCE_DIR_NAME, UPSTREAM_DIR_NAME
from phalconautocomplete.core.utils import major_version, validate_version
from phalconautocomplete.packaging.archive import (
    create_jar,
    extract_archive,
    find_release_root,
    relocate_sources,
)
from phalconautocomplete.packaging.download import download_archive
from phalconautocomplete.packaging.metadata import copy_metadata, placeholders_for, substitute_descriptor
from phalconautocomplete.packaging.workspace import ensure_output_dir, workspace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageRequest:
    version: str
    major_version: str
    meta_dir: Path
    dist_dir: Path


@dataclass
class PackageResult:
    version: str
    major_version: str
    artifact: Path
    source_entries: int = 0
    replacements: Dict[str, int] = field(default_factory=dict)


def request_for(version: str, settings: Settings, cwd: Optional[Path] = None) -> PackageRequest:
    """Build a request from a raw version string, anchoring directories at ``cwd``."""
    version = validate_version(version)
    return PackageRequest(
        version=version,
        major_version=major_version(version),
        meta_dir=Settings.resolve(settings.meta_dir, cwd),
        dist_dir=Settings.resolve(settings.dist_dir, cwd),
    )


def build_package(
    request: PackageRequest,
    settings: Settings,
    session: Optional[requests.Session] = None
) -> PackageResult:
    """
    Download, reshape, stamp and repack one release.

    Raises:
        PackagingError: Subclass naming the stage that failed
    """
    logger.info(f"Starting script for version {request.version}, major version {request.major_version}")
    jar_name = settings.artifact_name(request.version)

    with workspace(settings.workspace_prefix) as work_dir:
        dist_dir = ensure_output_dir(request.dist_dir)

        # Fetch
        url = settings.archive_url(request.version)
        zip_path = download_archive(url, work_dir / f"v{request.version}.zip", settings, session=session)

        # Unpack & reshape
        extract_dir = extract_archive(zip_path, work_dir / UPSTREAM_DIR_NAME)
        release_root = find_release_root(extract_dir)
        moved = relocate_sources(release_root, work_dir / SOURCE_DIR_NAME)

        # Metadata
        meta_dest = copy_metadata(request.meta_dir, work_dir / META_DIR_NAME)
        replacements = substitute_descriptor(
            meta_dest / settings.descriptor_name,
            placeholders_for(request.version, request.major_version),
            require_all=settings.require_placeholders,
        )

        # Repack & publish
        jar_path = create_jar(work_dir, work_dir / jar_name)
        artifact = dist_dir / jar_name
        try:
            shutil.move(str(jar_path), str(artifact))
        except (OSError, shutil.Error) as e:
            raise FileOperationError(f"Failed to move JAR file to dist directory: {e}") from e

    logger.info(f"JAR file created successfully: {artifact}")
    return PackageResult(
        version=request.version,
        major_version=request.major_version,
        artifact=artifact,
        source_entries=moved,
        replacements=replacements,
    )
