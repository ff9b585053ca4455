from __future__ import annotations

from dataclasses import replace

import pytest

from obshtml.domain.models import Document, ExportSettings, ShellResult, ViewState
from obshtml.services.exporter import VaultExporter
from obshtml.services.render_poll import RetryPolicy
from obshtml.services.vault_store import FileSystemVault

# ------------------------------
# Test doubles
# ------------------------------


class FakeSurface:
    """
    Rendering surface double. `scripts` maps a document path to the successive
    values rendered_html() returns while that document is open; once the
    script runs out the last value repeats. Unscripted documents render at once.
    """

    def __init__(self, scripts: dict[str, list[str]] | None = None, initial=None) -> None:
        self.scripts = {k: list(v) for k, v in (scripts or {}).items()}
        self.state = initial or ViewState()
        self.set_states: list[ViewState] = []
        self.opened: list[str] = []

    def open_document(self, doc: Document) -> None:
        self.opened.append(doc.path)
        self.state = replace(self.state, file=doc.path)

    def get_view_state(self) -> ViewState:
        return self.state

    def set_view_state(self, state: ViewState) -> None:
        self.set_states.append(state)
        self.state = state

    def rendered_html(self) -> str:
        path = self.state.file
        if self.state.mode != "preview" or path is None:
            return ""
        script = self.scripts.get(path)
        if script is None:
            return f"<p>{path}</p>"
        return script.pop(0) if len(script) > 1 else script[0]


class Notices:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str, timeout_ms: int | None = None) -> None:
        self.messages.append(message)


class FakeShell:
    def __init__(self, result: ShellResult) -> None:
        self.result = result
        self.commands: list[str] = []

    def run(self, command: str) -> ShellResult:
        self.commands.append(command)
        return self.result


def docs(*paths: str) -> list[Document]:
    return [Document(path=p) for p in paths]


@pytest.fixture()
def notices() -> Notices:
    return Notices()


def make_exporter(vault, surface, notices, *, shell=None) -> VaultExporter:
    return VaultExporter(
        store=vault,
        surface=surface,
        notify=notices,
        sleep=lambda ms: None,
        policy=RetryPolicy(),
        formatter=lambda html: html,
        shell=shell,
    )


# ------------------------------
# Tests
# ------------------------------


def test_export_mirrors_paths_under_output_root(vault: FileSystemVault, notices: Notices):
    exporter = make_exporter(vault, FakeSurface(), notices)

    summary = exporter.export_all(docs("a.md", "notes/b.md"), ExportSettings(output_root="out"))

    assert summary.exported == ["out/a.md.html", "out/notes/b.md.html"]
    assert vault.read_text("out/a.md.html") == "<p>a.md</p>"
    assert vault.read_text("out/notes/b.md.html") == "<p>notes/b.md</p>"
    assert notices.messages[0] == "Exporting files, hang on..."
    assert notices.messages[-1] == "Export done"


def test_documents_under_output_root_are_skipped(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface()
    exporter = make_exporter(vault, surface, notices)
    batch = docs("a.md", "out/a.md.html", "out/notes/old.md", "outside/c.md")

    summary = exporter.export_all(batch, ExportSettings(output_root="out"))

    assert summary.skipped == ["out/a.md.html", "out/notes/old.md"]
    assert len(summary.exported) == len(batch) - 2
    assert "out/out/notes/old.md.html" not in summary.exported
    assert surface.opened == ["a.md", "outside/c.md"]


def test_rerun_is_stable(vault: FileSystemVault, add_note, notices: Notices):
    add_note("a.md")
    add_note("notes/b.md")
    exporter = make_exporter(vault, FakeSurface(), notices)
    settings = ExportSettings(output_root="out")

    exporter.export_all(vault.list_markdown_files(), settings)
    second = exporter.export_all(vault.list_markdown_files(), settings)

    assert second.exported == ["out/a.md.html", "out/notes/b.md.html"]
    assert [d.path for d in vault.list_files()] == [
        "a.md",
        "notes/b.md",
        "out/a.md.html",
        "out/notes/b.md.html",
    ]


def test_each_document_is_forced_into_preview(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface()
    make_exporter(vault, surface, notices).export_all(docs("a.md"), ExportSettings(output_root="o"))

    assert ViewState(file="a.md", mode="preview") in surface.set_states


def test_render_polled_until_fifth_read(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface({"a.md": ["", "", "", "", "<h1>late</h1>"]})

    summary = make_exporter(vault, surface, notices).export_all(
        docs("a.md"), ExportSettings(output_root="out")
    )

    assert vault.read_text("out/a.md.html") == "<h1>late</h1>"
    assert summary.empty == []


def test_empty_render_reported_and_batch_continues(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface({"a.md": [""]})

    summary = make_exporter(vault, surface, notices).export_all(
        docs("a.md", "b.md"), ExportSettings(output_root="out")
    )

    assert "Error: returned html is empty for a.md" in notices.messages
    assert summary.empty == ["a.md"]
    assert vault.read_text("out/a.md.html") == ""
    assert vault.read_text("out/b.md.html") == "<p>b.md</p>"
    assert notices.messages[-1] == "Export done"


def test_zero_documents_still_completes(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface()
    summary = make_exporter(vault, surface, notices).export_all([], ExportSettings())

    assert summary.exported == []
    assert vault.list_files() == []
    assert notices.messages[-1] == "Export done"


def test_view_state_restored_after_export(vault: FileSystemVault, notices: Notices):
    original = ViewState(file=None, mode="source")
    surface = FakeSurface({"a.md": [""]}, initial=original)

    make_exporter(vault, surface, notices).export_all(
        docs("a.md", "b.md"), ExportSettings(output_root="out")
    )

    assert surface.set_states[-1] == original


def test_io_error_aborts_batch_but_restores_view_state(vault: FileSystemVault, notices: Notices):
    original = ViewState(file="home.md", mode="source")
    surface = FakeSurface(initial=original)

    class BrokenVault(FileSystemVault):
        def create(self, path: str, data: str) -> None:
            raise PermissionError("read-only vault")

    broken = BrokenVault(vault.base_path)
    exporter = make_exporter(broken, surface, notices)

    with pytest.raises(PermissionError):
        exporter.export_all(docs("a.md", "b.md"), ExportSettings(output_root="out"))

    assert surface.set_states[-1] == original
    assert surface.opened == ["a.md"]
    assert "Export done" not in notices.messages


def test_colliding_export_paths_last_writer_wins(vault: FileSystemVault, notices: Notices):
    surface = FakeSurface({"a.md": ["<p>first</p>"]})
    exporter = make_exporter(vault, surface, notices)

    exporter.export_all(docs("a.md"), ExportSettings(output_root="out"))
    surface.scripts["a.md"] = ["<p>second</p>"]
    summary = exporter.export_all(docs("a.md", "a.md"), ExportSettings(output_root="out"))

    assert summary.exported == ["out/a.md.html", "out/a.md.html"]
    assert vault.read_text("out/a.md.html") == "<p>second</p>"


def test_formatter_applied_to_rendered_html(vault: FileSystemVault, notices: Notices):
    exporter = VaultExporter(
        store=vault,
        surface=FakeSurface(),
        notify=notices,
        sleep=lambda ms: None,
        formatter=str.upper,
    )
    exporter.export_all(docs("a.md"), ExportSettings(output_root="out"))
    assert vault.read_text("out/a.md.html") == "<P>A.MD</P>"


# ------------------------------
# Post-export
# ------------------------------


def test_post_export_runs_generator_when_enabled(vault: FileSystemVault, notices: Notices):
    shell = FakeShell(ShellResult(exit_status=0, stdout="built", stderr=""))
    settings = ExportSettings(
        output_root="out",
        run_post_export=True,
        post_export_working_dir="/work",
        post_export_config_path="/work/config.yml",
    )

    summary = make_exporter(vault, FakeSurface(), notices, shell=shell).export_all(
        docs("a.md"), settings
    )

    assert shell.commands == ['cd "/work"; obsidianhtml -i "/work/config.yml"']
    assert summary.post_export is not None and summary.post_export.ok
    assert notices.messages.index("Export done") < notices.messages.index(
        "Running ObsidianHtml --> done!"
    )


def test_post_export_failure_reported(vault: FileSystemVault, notices: Notices):
    shell = FakeShell(ShellResult(exit_status=1, stdout="", stderr="boom"))
    settings = ExportSettings(output_root="out", run_post_export=True)

    summary = make_exporter(vault, FakeSurface(), notices, shell=shell).export_all(
        docs("a.md"), settings
    )

    assert summary.post_export == ShellResult(exit_status=1, stdout="", stderr="boom")
    assert notices.messages[-1] == "Running ObsidianHtml --> failed!"
    # files already exported stay in place
    assert vault.read_text("out/a.md.html") == "<p>a.md</p>"


def test_post_export_not_run_when_disabled(vault: FileSystemVault, notices: Notices):
    shell = FakeShell(ShellResult(exit_status=0, stdout="x", stderr=""))
    make_exporter(vault, FakeSurface(), notices, shell=shell).export_all(
        docs("a.md"), ExportSettings(output_root="out")
    )
    assert shell.commands == []


def test_post_export_without_shell_runner_raises(vault: FileSystemVault, notices: Notices):
    exporter = make_exporter(vault, FakeSurface(), notices)
    with pytest.raises(RuntimeError):
        exporter.run_post_export(ExportSettings(run_post_export=True))


@pytest.mark.parametrize("root", ["", "/"])
def test_empty_output_root_exports_next_to_the_notes(
    vault: FileSystemVault, notices: Notices, root
):
    settings = ExportSettings.from_mapping({"output_root": root})

    summary = make_exporter(vault, FakeSurface(), notices).export_all(
        docs("a.md", "notes/b.md"), settings
    )

    assert summary.exported == ["a.md.html", "notes/b.md.html"]
    assert vault.read_text("notes/b.md.html") == "<p>notes/b.md</p>"


def test_undecodable_note_is_reported_and_batch_continues(
    qapp, vault: FileSystemVault, vault_root, add_note, renderer, notices: Notices
):
    from obshtml.services.ui.adapters import QtRenderSurface, qt_wait

    (vault_root / "a.md").write_bytes(b"caf\xe9")
    add_note("b.md", "# Bravo")
    surface = QtRenderSurface(vault, renderer, debounce_ms=0)
    exporter = VaultExporter(
        store=vault,
        surface=surface,
        notify=notices,
        sleep=qt_wait,
        formatter=lambda html: html,
    )

    summary = exporter.export_all(vault.list_markdown_files(), ExportSettings(output_root="out"))

    assert summary.failed == ["a.md"]
    assert summary.exported == ["out/b.md.html"]
    assert "Bravo" in vault.read_text("out/b.md.html")
    assert vault.get_entry("out/a.md.html") is None
    assert any(m.startswith("Error: could not load a.md") for m in notices.messages)
    assert notices.messages[-1] == "Export done"
    assert surface.get_view_state() == ViewState()
