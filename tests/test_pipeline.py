"""End-to-end tests of the packaging pipeline with a faked download."""

import zipfile

import pytest

from phalconautocomplete.core.config import Settings
from phalconautocomplete.core.errors import DownloadError, StructureError, SubstitutionError
from phalconautocomplete.packaging import build_package, request_for

from conftest import fake_session, make_release_zip


def test_request_for_resolves_paths(tmp_path):
    settings = Settings(_env_file=None)
    request = request_for(" 3.4.2 ", settings, cwd=tmp_path)
    assert request.version == "3.4.2"
    assert request.major_version == "3"
    assert request.meta_dir == tmp_path / "meta"
    assert request.dist_dir == tmp_path / "dist"


def test_build_package(tmp_path, settings, temp_root):
    session = fake_session(make_release_zip("3.4.2"))
    request = request_for("3.4.2", settings, cwd=tmp_path)

    result = build_package(request, settings, session=session)

    artifact = tmp_path / "dist" / "phalconautocomplete-3.4.2.jar"
    assert result.artifact == artifact
    assert result.major_version == "3"
    assert result.source_entries == 1
    assert result.replacements == {"{version}": 2, "{majorversion}": 2}
    assert [p.name for p in (tmp_path / "dist").iterdir()] == [artifact.name]
    assert list(temp_root.iterdir()) == []
    assert session.get.call_args[0][0] == "https://github.com/phalcon/ide-stubs/archive/refs/tags/v3.4.2.zip"

    with zipfile.ZipFile(artifact) as jar:
        names = jar.namelist()
        descriptor = jar.read("META-INF/plugin.xml").decode("utf-8")
    assert {name.split("/")[0] for name in names} == {"src", "META-INF"}
    assert "src/Phalcon/Di.php" in names
    assert "src/Phalcon/Mvc/Model.php" in names
    assert "META-INF/icons/pluginIcon.svg" in names
    assert "<version>3.4.2</version>" in descriptor
    assert 'id="phalcon3"' in descriptor
    assert "{version}" not in descriptor and "{majorversion}" not in descriptor


def test_second_run_replaces_artifact(tmp_path, settings, temp_root):
    request = request_for("3.4.2", settings, cwd=tmp_path)
    first = build_package(request, settings, session=fake_session(make_release_zip("3.4.2")))
    with zipfile.ZipFile(first.artifact) as jar:
        first_descriptor = jar.read("META-INF/plugin.xml")

    second = build_package(request, settings, session=fake_session(make_release_zip("3.4.2")))
    with zipfile.ZipFile(second.artifact) as jar:
        second_descriptor = jar.read("META-INF/plugin.xml")

    assert first.artifact == second.artifact
    assert first_descriptor == second_descriptor
    assert len(list((tmp_path / "dist").iterdir())) == 1


def test_download_failure_leaves_no_artifact(tmp_path, settings, temp_root):
    request = request_for("9.9.9", settings, cwd=tmp_path)
    with pytest.raises(DownloadError):
        build_package(request, settings, session=fake_session(status=404))
    assert list((tmp_path / "dist").iterdir()) == []
    assert list(temp_root.iterdir()) == []


def test_missing_src_stops_before_metadata(tmp_path, settings, temp_root, monkeypatch):
    copied = []
    monkeypatch.setattr(
        "phalconautocomplete.packaging.pipeline.copy_metadata",
        lambda *args: copied.append(args),
    )
    request = request_for("3.4.2", settings, cwd=tmp_path)
    with pytest.raises(StructureError, match="Source directory not found"):
        build_package(request, settings, session=fake_session(make_release_zip("3.4.2", with_src=False)))
    assert copied == []
    assert list((tmp_path / "dist").iterdir()) == []


def test_descriptor_without_placeholders(tmp_path, settings, meta_dir, temp_root):
    (meta_dir / "plugin.xml").write_text("<idea-plugin><version>1</version></idea-plugin>\n")
    request = request_for("3.4.2", settings, cwd=tmp_path)
    with pytest.raises(SubstitutionError):
        build_package(request, settings, session=fake_session(make_release_zip("3.4.2")))
    assert list(temp_root.iterdir()) == []

    lenient = settings.model_copy(update={"require_placeholders": False})
    result = build_package(request, lenient, session=fake_session(make_release_zip("3.4.2")))
    assert result.replacements == {"{version}": 0, "{majorversion}": 0}
    assert result.artifact.is_file()
