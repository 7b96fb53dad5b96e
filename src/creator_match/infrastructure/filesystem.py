"""Filesystem implementation for infrastructure.

Usage example:
    from pathlib import Path

    import pandas as pd

    from creator_match.infrastructure.filesystem import LocalFileSystem

    fs = LocalFileSystem()
    fs.write_csv(pd.DataFrame({"col": ["a"]}), Path("data/out.csv"))
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import override

import pandas as pd

from ..protocols import FileSystem
from .io.validation import IncomingDataError, validate_json_as


class JsonObjectExpectedError(RuntimeError):
    """Raised when a JSON file does not contain an object."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"JSON file must contain an object: {path}")


class LocalFileSystem(FileSystem):
    """Local filesystem implementation."""

    @override
    def read_csv(self, path: Path) -> pd.DataFrame:
        return pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")

    @override
    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)

    @override
    def read_json(self, path: Path) -> dict[str, object]:
        payload = path.read_text(encoding="utf-8")
        try:
            return validate_json_as(dict[str, object], payload)
        except IncomingDataError as exc:
            raise JsonObjectExpectedError(path) from exc

    @override
    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(dict(data), ensure_ascii=False, indent=2), encoding="utf-8")

    @override
    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    @override
    def write_text(self, content: str, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @override
    def exists(self, path: Path) -> bool:
        return path.exists()

    @override
    def rename(self, src: Path, dest: Path) -> None:
        src.replace(dest)

    @override
    def mkdir(self, path: Path, parents: bool = True) -> None:
        path.mkdir(parents=parents, exist_ok=True)
