"""Local-disk implementation of the function filesystem port."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence

from functionkit.ports.filesystem import FunctionFileSystem


class LocalFileSystem(FunctionFileSystem):
    def exists(self, path: Path) -> bool:
        return path.exists()

    def list_directories(self, path: Path) -> Sequence[str]:
        if not path.is_dir():
            return []
        return sorted(entry.name for entry in path.iterdir() if entry.is_dir())

    def rename(self, source: Path, target: Path) -> None:
        source.rename(target)

    def copy_tree(self, source: Path, target: Path) -> list[Path]:
        shutil.copytree(source, target, dirs_exist_ok=True)
        return sorted(p.relative_to(source) for p in source.rglob("*") if p.is_file())

    def replace_token(self, path: Path, token: str, value: str) -> None:
        # bytes keep line endings untouched
        content = path.read_bytes()
        path.write_bytes(content.replace(token.encode("utf-8"), value.encode("utf-8")))

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
