from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from flare_edge.domain.errors import ArchiveError
from flare_edge.infrastructure.archives import ZipProjectArchiver


def _write(root: Path, relative: str, content: bytes) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def test_compress_archives_everything_except_excluded_paths(tmp_path: Path) -> None:
    project = tmp_path / "project"
    files = {
        "package.json": b'{"name": "site"}',
        "src/index.js": b"console.log('hi');\n" * 50,
        "dist/img/logo.png": bytes(range(256)),
    }
    for relative, content in files.items():
        _write(project, relative, content)
    _write(project, "cache/a.bin", b"cached")
    _write(project, "cache/deep/b.bin", b"cached too")

    output = ZipProjectArchiver().compress(project, ["cache/**"], tmp_path / "out.zip")

    assert output == (tmp_path / "out.zip").absolute()
    with zipfile.ZipFile(output) as archive:
        assert sorted(archive.namelist()) == sorted(files)
        for relative, content in files.items():
            assert archive.read(relative) == content
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())


def test_compress_skips_output_file_inside_root(tmp_path: Path) -> None:
    _write(tmp_path, "a.txt", b"a")

    output = ZipProjectArchiver().compress(tmp_path, [], tmp_path / "self.zip")

    with zipfile.ZipFile(output) as archive:
        assert archive.namelist() == ["a.txt"]


def test_compress_raises_archive_error_for_missing_root(tmp_path: Path) -> None:
    with pytest.raises(ArchiveError, match="Failed to create zip file"):
        ZipProjectArchiver().compress(tmp_path / "missing", [], tmp_path / "out.zip")


def test_compress_raises_archive_error_when_output_cannot_be_opened(tmp_path: Path) -> None:
    _write(tmp_path / "project", "a.txt", b"a")

    with pytest.raises(ArchiveError):
        ZipProjectArchiver().compress(
            tmp_path / "project",
            [],
            tmp_path / "no-such-dir" / "out.zip",
        )

    assert not (tmp_path / "no-such-dir").exists()


def test_compress_ignores_unreadable_excluded_directory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    project = tmp_path / "project"
    _write(project, "a.txt", b"a")
    _write(project, ".cache/private/blob", b"locked")
    real_scandir = os.scandir

    def guarded_scandir(path):
        if Path(path).name == ".cache":
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr("flare_edge.infrastructure.files.enumerator.os.scandir", guarded_scandir)

    output = ZipProjectArchiver().compress(project, [".cache/**"], tmp_path / "out.zip")

    with zipfile.ZipFile(output) as archive:
        assert archive.namelist() == ["a.txt"]
