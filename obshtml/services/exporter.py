from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from obshtml.domain.errors import DocumentLoadError, EmptyRenderError
from obshtml.domain.interfaces import IDocumentStore, IRenderSurface, IShellRunner
from obshtml.domain.models import Document, ExportSettings, ExportSummary, ShellResult
from obshtml.services.html_formatter import HtmlFormatter
from obshtml.services.render_poll import RetryPolicy, Sleep, TimedOut, poll_until_ready
from obshtml.services.shell_runner import build_post_export_command
from obshtml.services.vault_paths import export_path_for, segment_prefix_match
from obshtml.services.vault_writer import overwrite
from obshtml.utils.constants import (
    MODE_PREVIEW,
    NOTICE_EXPORT_START_MS,
    NOTICE_SHELL_DONE_MS,
    NOTICE_SHELL_START_MS,
    POST_EXPORT_GENERATOR,
)

logger = logging.getLogger(__name__)

Notify = Callable[..., None]


class VaultExporter:
    """
    Renders every document through the shared rendering surface and writes the
    HTML to a mirrored tree under the output root.

    Documents are processed strictly one after the other: the surface is a
    single UI resource, and opening document N+1 before document N's HTML has
    been read would mix up the results.
    """

    def __init__(
        self,
        *,
        store: IDocumentStore,
        surface: IRenderSurface,
        notify: Notify,
        sleep: Sleep,
        policy: RetryPolicy | None = None,
        formatter: Callable[[str], str] | None = None,
        shell: IShellRunner | None = None,
        generator: str = POST_EXPORT_GENERATOR,
    ) -> None:
        self._store = store
        self._surface = surface
        self._notify = notify
        self._sleep = sleep
        self._policy = policy or RetryPolicy()
        self._format = formatter or HtmlFormatter()
        self._shell = shell
        self._generator = generator

    # ----------------------------- export -----------------------------

    def export_all(self, documents: Sequence[Document], settings: ExportSettings) -> ExportSummary:
        summary = ExportSummary()

        original_state = self._surface.get_view_state()
        self._notify("Exporting files, hang on...", NOTICE_EXPORT_START_MS)

        try:
            for doc in documents:
                if segment_prefix_match(settings.output_root, doc.path):
                    logger.debug("Skipping %s (inside export folder)", doc.path)
                    summary.skipped.append(doc.path)
                    continue

                html = self._render(doc, summary)
                if html is None:
                    continue

                export_path = export_path_for(settings.output_root, doc.path)
                if export_path in summary.exported:
                    # Not deduplicated: the later document wins.
                    logger.warning("Export path %s written twice in one run", export_path)
                overwrite(self._store, export_path, self._format(html))
                summary.exported.append(export_path)
        finally:
            self._surface.set_view_state(original_state)

        logger.info(
            "Export done: %d written, %d skipped, %d empty, %d failed",
            len(summary.exported),
            len(summary.skipped),
            len(summary.empty),
            len(summary.failed),
        )
        self._notify("Export done")

        if settings.run_post_export:
            summary.post_export = self.run_post_export(settings)

        return summary

    def _render(self, doc: Document, summary: ExportSummary) -> str | None:
        """Rendered HTML for `doc`, "" if it stayed empty, None if it could not be loaded."""
        logger.debug("Rendering %s", doc.path)

        # Coerce the view into preview mode so the surface produces HTML.
        try:
            self._surface.open_document(doc)
            state = self._surface.get_view_state()
            self._surface.set_view_state(replace(state, mode=MODE_PREVIEW))
        except (OSError, ValueError) as e:
            # Reading a note is per document; only writes abort the batch.
            err = DocumentLoadError(doc.path, e)
            logger.error("%s", err)
            self._notify(str(err))
            summary.failed.append(doc.path)
            return None

        outcome = poll_until_ready(self._surface.rendered_html, self._policy, self._sleep)
        if isinstance(outcome, TimedOut):
            err = EmptyRenderError(doc.path, outcome.attempts)
            logger.error("%s (after %d reads)", err, err.attempts)
            self._notify(str(err))
            summary.empty.append(doc.path)
            return ""
        return outcome.content

    # ----------------------------- post export -----------------------------

    def run_post_export(self, settings: ExportSettings) -> ShellResult:
        if self._shell is None:
            raise RuntimeError("No shell runner configured for post-export.")

        self._notify(
            "Running ObsidianHtml... (You'll get notified when it's done)",
            NOTICE_SHELL_START_MS,
        )
        command = build_post_export_command(
            settings.post_export_working_dir,
            settings.post_export_config_path,
            self._generator,
        )
        result = self._shell.run(command)

        if result.stderr:
            logger.error("stderr: %s", result.stderr)
        if result.stdout:
            logger.info("stdout: %s", result.stdout)

        if result.ok:
            self._notify("Running ObsidianHtml --> done!", NOTICE_SHELL_DONE_MS)
        else:
            self._notify("Running ObsidianHtml --> failed!", NOTICE_SHELL_DONE_MS)
        return result
