"""Slash-delimited vault path helpers (vault paths are never OS paths)."""

from __future__ import annotations

from obshtml.utils.constants import EXPORT_SUFFIX


def segment_prefix_match(root: str, path: str) -> bool:
    """
    True if `path` is `root` or lies beneath it, compared per `/` segment.

    "a/b" contains "a/b/c" but not "a/bc".
    """
    root_parts = root.split("/")
    path_parts = path.split("/")

    if len(root_parts) > len(path_parts):
        return False

    for root_part, path_part in zip(root_parts, path_parts):
        if root_part != path_part:
            return False
    return True


def parent_folder(path: str) -> str:
    """Folder part of a vault path; "" for entries at the vault root."""
    return "/".join(path.split("/")[:-1])


def _join(folder: str, name: str) -> str:
    # An empty folder is the vault root: no leading "/".
    return f"{folder}/{name}" if folder else name


def export_path_for(output_root: str, doc_path: str) -> str:
    return _join(output_root, f"{doc_path}{EXPORT_SUFFIX}")


def file_list_path(output_root: str, kind: str) -> str:
    return _join(output_root, f"{kind}_files.json")
