# src/phalconautocomplete/core/utils.py

import logging
import sys

from phalconautocomplete.core.settings import LOG_DATE_FORMAT, LOG_FORMAT


def major_version(version: str) -> str:
    """
    Return the part of a version string before the first '.'.

    A version without any '.' is its own major version.
    """
    return version.split(".", 1)[0]


def validate_version(version: str) -> str:
    """
    Strip surrounding whitespace and reject an empty version.
    Path separators are refused since the version ends up in a file name;
    the format itself is not checked.
    """
    version = (version or "").strip()
    if not version:
        raise ValueError("Version must not be empty")
    if "/" in version or "\\" in version:
        raise ValueError(f"Invalid version {version!r}: path separators are not allowed")
    return version


def configure_logging(verbose: bool = False) -> None:
    # Progress and failures share stdout, one timestamped line each
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True
    )
