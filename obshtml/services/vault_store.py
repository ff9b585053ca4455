from __future__ import annotations

import shutil
from pathlib import Path

from obshtml.domain.interfaces import IDocumentStore
from obshtml.domain.models import Document, VaultEntry
from obshtml.utils.constants import MARKDOWN_SUFFIX


class FileSystemVault(IDocumentStore):
    """
    A vault backed by a folder on disk.

    Enumeration is sorted by vault path and skips hidden entries (any segment
    starting with "."), which is where hosts keep their own state.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root).resolve()

    @property
    def base_path(self) -> str:
        return self._root.as_posix()

    # ---------- Enumeration ----------

    def list_files(self) -> list[Document]:
        return [Document(path=p) for p in self._iter_paths()]

    def list_markdown_files(self) -> list[Document]:
        return [Document(path=p) for p in self._iter_paths() if p.endswith(MARKDOWN_SUFFIX)]

    def _iter_paths(self) -> list[str]:
        out: list[str] = []
        for p in self._root.rglob("*"):
            rel = p.relative_to(self._root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if p.is_file():
                out.append(rel.as_posix())
        return sorted(out)

    # ---------- Entries ----------

    def get_entry(self, path: str) -> VaultEntry | None:
        target = self._resolve(path)
        if not target.exists():
            return None
        return VaultEntry(path=path, is_folder=target.is_dir())

    def read_text(self, path: str) -> str:
        return self._resolve(path).read_text(encoding="utf-8")

    def create(self, path: str, data: str) -> None:
        target = self._resolve(path)
        # "x" mode: creating over an existing entry is an error, like the host's.
        with target.open("x", encoding="utf-8") as fh:
            fh.write(data)

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_dir():
            shutil.rmtree(target)
        else:
            target.unlink()

    def create_folder(self, path: str) -> None:
        self._resolve(path).mkdir()

    # ---------- Helpers ----------

    def _resolve(self, path: str) -> Path:
        if not path:
            raise ValueError("Empty vault path")
        target = (self._root / path).resolve()
        if target != self._root and self._root not in target.parents:
            raise ValueError(f"Path escapes the vault: {path}")
        return target
