"""
Packaging stages: workspace, download, archive handling, metadata and the
pipeline that chains them.
"""

from phalconautocomplete.packaging.pipeline import (
    PackageRequest,
    PackageResult,
    build_package,
    request_for,
)

__all__ = ["PackageRequest", "PackageResult", "build_package", "request_for"]
