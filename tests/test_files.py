from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from kube_slice.core.errors import InputError
from kube_slice.utils.files import delete_folder_contents, load_file, load_folder, output_path


class TestLoadFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "in.yaml"
        path.write_bytes(b"kind: Pod\n")
        assert load_file(str(path)) == b"kind: Pod\n"

    @pytest.mark.parametrize("name", ["", "-"])
    def test_reads_stdin(self, monkeypatch: pytest.MonkeyPatch, name: str) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"kind: Pod\n")))
        assert load_file(name) == b"kind: Pod\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="unable to read file"):
            load_file(str(tmp_path / "missing.yaml"))


class TestLoadFolder:
    """Test concatenating a folder of manifests."""

    @pytest.fixture
    def folder(self, tmp_path: Path) -> Path:
        (tmp_path / "b.yaml").write_bytes(b"name: b")
        (tmp_path / "a.YML").write_bytes(b"name: a")
        (tmp_path / "readme.md").write_bytes(b"docs")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "c.yaml").write_bytes(b"name: c")
        return tmp_path

    def test_top_level_only(self, folder: Path) -> None:
        data, count = load_folder(str(folder))
        assert count == 2
        assert data == b"name: a\n---\nname: b"

    def test_recurse(self, folder: Path) -> None:
        data, count = load_folder(str(folder), recurse=True)
        assert count == 3
        assert b"name: c" in data

    def test_custom_extensions(self, folder: Path) -> None:
        data, count = load_folder(str(folder), extensions=["md"])
        assert (data, count) == (b"docs", 1)

    def test_no_matching_files(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="no files found"):
            load_folder(str(tmp_path))

    def test_missing_folder(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="does not exist"):
            load_folder(str(tmp_path / "missing"))


class TestDeleteFolderContents:
    def test_keeps_folder(self, tmp_path: Path) -> None:
        (tmp_path / "a.yaml").write_text("a")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.yaml").write_text("b")

        delete_folder_contents(str(tmp_path))

        assert tmp_path.is_dir()
        assert list(tmp_path.iterdir()) == []


class TestOutputPath:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("pod.yaml", "out/pod.yaml"), ("prod/pod.yaml", "out/prod/pod.yaml"), ("/tmp/pod.yaml", "out/tmp/pod.yaml")],
    )
    def test_joins_under_directory(self, filename: str, expected: str) -> None:
        assert output_path("out", filename) == Path(expected)
