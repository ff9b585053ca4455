from __future__ import annotations

import pytest

from obshtml.domain.models import VaultEntry
from obshtml.services.vault_store import FileSystemVault


def test_listing_is_sorted_and_skips_hidden(vault: FileSystemVault, add_note):
    add_note("z.md")
    add_note("notes/b.md")
    add_note("a.md")
    add_note("img/pic.png", "binary-ish")
    add_note(".obsidian/workspace.md")
    add_note("notes/.hidden.md")

    assert [d.path for d in vault.list_markdown_files()] == ["a.md", "notes/b.md", "z.md"]
    assert [d.path for d in vault.list_files()] == [
        "a.md",
        "img/pic.png",
        "notes/b.md",
        "z.md",
    ]


def test_get_entry_present_and_absent(vault: FileSystemVault, add_note):
    add_note("notes/b.md")
    assert vault.get_entry("notes") == VaultEntry(path="notes", is_folder=True)
    assert vault.get_entry("notes/b.md") == VaultEntry(path="notes/b.md", is_folder=False)
    assert vault.get_entry("missing.md") is None


def test_create_refuses_existing_entry(vault: FileSystemVault):
    vault.create("x.html", "one")
    with pytest.raises(FileExistsError):
        vault.create("x.html", "two")
    assert vault.read_text("x.html") == "one"


def test_create_folder_is_single_level(vault: FileSystemVault):
    with pytest.raises(FileNotFoundError):
        vault.create_folder("a/b")
    vault.create_folder("a")
    vault.create_folder("a/b")
    assert vault.get_entry("a/b") is not None


def test_delete_file_and_folder(vault: FileSystemVault, add_note):
    add_note("out/x/y.html")
    vault.delete("out/x/y.html")
    assert vault.get_entry("out/x/y.html") is None
    vault.delete("out")
    assert vault.get_entry("out") is None


@pytest.mark.parametrize("bad", ["../escape.md", "", "a/../../x"])
def test_paths_must_stay_inside_the_vault(vault: FileSystemVault, bad: str):
    with pytest.raises(ValueError):
        vault.get_entry(bad)
