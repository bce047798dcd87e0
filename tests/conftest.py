"""Shared fixtures: fake upstream releases, meta directories and HTTP responses."""

import io
import tempfile
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from phalconautocomplete.core.config import Settings

DESCRIPTOR = """<idea-plugin>
    <name>Phalcon {majorversion} Autocomplete</name>
    <version>{version}</version>
    <description>Stubs for Phalcon {version}</description>
    <libraryRoot id="phalcon{majorversion}" path="/src/"/>
</idea-plugin>
"""


def make_release_zip(version: str = "3.4.2", with_src: bool = True, top_dirs=None) -> bytes:
    """Build an in-memory archive shaped like a GitHub tag snapshot."""
    top_dirs = top_dirs or [f"ide-stubs-{version}"]
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zipf:
        for top in top_dirs:
            zipf.writestr(f"{top}/README.md", "# ide-stubs\n")
            zipf.writestr(f"{top}/composer.json", "{}\n")
            if with_src:
                zipf.writestr(f"{top}/src/Phalcon/Di.php", "<?php\nnamespace Phalcon;\nclass Di {}\n")
                zipf.writestr(f"{top}/src/Phalcon/Mvc/Model.php", "<?php\nnamespace Phalcon\\Mvc;\nclass Model {}\n")
                zipf.writestr(f"{top}/src/Phalcon/Version.php", "<?php\nnamespace Phalcon;\nclass Version {}\n")
    return buf.getvalue()


def fake_response(body: bytes = b"", status: int = 200) -> MagicMock:
    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.status_code = status
    response.iter_content.return_value = [body[i:i + 1024] for i in range(0, len(body), 1024)]
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Client Error")
    return response


def fake_session(body: bytes = b"", status: int = 200) -> MagicMock:
    session = MagicMock()
    session.get.return_value = fake_response(body, status)
    return session


@pytest.fixture
def meta_dir(tmp_path: Path) -> Path:
    meta = tmp_path / "meta"
    (meta / "icons").mkdir(parents=True)
    (meta / "plugin.xml").write_text(DESCRIPTOR, encoding="utf-8")
    (meta / "icons" / "pluginIcon.svg").write_text("<svg/>\n", encoding="utf-8")
    return meta


@pytest.fixture
def temp_root(tmp_path: Path, monkeypatch) -> Path:
    """Redirect system temporary directories so leftovers can be inspected."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def settings(tmp_path: Path, meta_dir: Path) -> Settings:
    return Settings(meta_dir=meta_dir, dist_dir=tmp_path / "dist", _env_file=None)
