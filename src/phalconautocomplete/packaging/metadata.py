"""
Merge of the static plugin metadata and placeholder substitution in the
plugin descriptor.
"""

import logging
import re
import shutil
from pathlib import Path
from typing import Dict, Tuple

from phalconautocomplete.core.errors import FileOperationError, SubstitutionError
from phalconautocomplete.core.settings import MAJOR_VERSION_PLACEHOLDER, VERSION_PLACEHOLDER

logger = logging.getLogger(__name__)


def copy_metadata(meta_dir: Path, destination: Path) -> Path:
    """
    Recursively copy every entry of ``meta_dir`` into ``destination``.
    """
    if not meta_dir.is_dir():
        raise FileOperationError(f"Failed to copy meta files: {meta_dir} is not a directory")
    try:
        destination.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(f"Failed to create META-INF directory: {e}") from e
    try:
        shutil.copytree(meta_dir, destination, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FileOperationError(f"Failed to copy meta files: {e}") from e
    logger.info(f"Copied meta files from {meta_dir} to {destination}")
    return destination


def placeholders_for(version: str, major: str) -> Dict[str, str]:
    return {
        VERSION_PLACEHOLDER: version,
        MAJOR_VERSION_PLACEHOLDER: major,
    }


def render_placeholders(
    text: str,
    values: Dict[str, str],
    require_all: bool = True
) -> Tuple[str, Dict[str, int]]:
    """
    Replace every occurrence of each placeholder token in ``text``.

    All tokens are replaced in one pass, so a substituted value is never
    scanned for tokens again.

    Returns:
        Tuple of (rendered text, occurrences replaced per token)

    Raises:
        SubstitutionError: If ``require_all`` is set and a token does not occur
    """
    counts = {token: text.count(token) for token in values}
    missing = [token for token, count in counts.items() if count == 0]
    if require_all and missing:
        raise SubstitutionError(f"Placeholder(s) not found: {', '.join(missing)}")
    if not values:
        return text, counts

    pattern = re.compile("|".join(re.escape(t) for t in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda m: values[m.group(0)], text), counts


def substitute_descriptor(path: Path, values: Dict[str, str], require_all: bool = True) -> Dict[str, int]:
    """
    Rewrite the plugin descriptor in place with placeholders resolved.
    """
    if not path.is_file():
        raise SubstitutionError(f"Plugin descriptor {path.name} not found in {path.parent}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SubstitutionError(f"Failed to read {path.name}: {e}") from e

    rendered, counts = render_placeholders(text, values, require_all=require_all)

    try:
        path.write_text(rendered, encoding="utf-8")
    except OSError as e:
        raise SubstitutionError(f"Failed to replace version in {path.name}: {e}") from e

    for token, count in counts.items():
        logger.info(f"Replaced {count} occurrence(s) of {token} with {values[token]} in {path.name}")
    return counts
