"""Tests for the local filesystem adapter."""

from pathlib import Path

import pandas as pd
import pytest

from creator_match.infrastructure import LocalFileSystem
from creator_match.infrastructure.filesystem import JsonObjectExpectedError


class TestLocalFileSystem:
    """Round trips and atomic rename on disk."""

    def test_csv_is_read_back_as_strings(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "nested" / "out.csv"

        fs.write_csv(pd.DataFrame({"score": [0.5], "note": [None]}), path)
        df = fs.read_csv(path)

        assert df["score"].tolist() == ["0.5"]
        assert df["note"].tolist() == [""]

    def test_csv_keeps_na_like_tokens(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "ids.csv"

        fs.write_csv(pd.DataFrame({"id": ["NA", "null", "nan"]}), path)

        assert fs.read_csv(path)["id"].tolist() == ["NA", "null", "nan"]

    def test_read_json_requires_object(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(JsonObjectExpectedError):
            fs.read_json(path)

    def test_json_keeps_unicode(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        path = tmp_path / "data.json"

        fs.write_json({"bio": "làm đẹp"}, path)

        assert "làm đẹp" in path.read_text(encoding="utf-8")
        assert fs.read_json(path) == {"bio": "làm đẹp"}

    def test_rename_replaces_destination(self, tmp_path: Path) -> None:
        fs = LocalFileSystem()
        src = tmp_path / "table.csv.tmp"
        dest = tmp_path / "table.csv"
        fs.write_text("old", dest)
        fs.write_text("new", src)

        fs.rename(src, dest)

        assert fs.read_text(dest) == "new"
        assert not fs.exists(src)
