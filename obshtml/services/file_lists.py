from __future__ import annotations

import json
import logging
from collections.abc import Callable

from obshtml.domain.interfaces import IDocumentStore
from obshtml.domain.models import ExportSettings
from obshtml.services.vault_paths import file_list_path
from obshtml.services.vault_writer import overwrite

logger = logging.getLogger(__name__)

KIND_MARKDOWN = "markdown"
KIND_ALL = "all"


def dump_file_list(
    store: IDocumentStore,
    notify: Callable[..., None],
    settings: ExportSettings,
    kind: str,
) -> str:
    """Write the vault paths of `kind` as a JSON array into the export folder."""
    if kind == KIND_MARKDOWN:
        files = store.list_markdown_files()
    else:
        files = store.list_files()

    paths = [f.path for f in files]
    export_path = file_list_path(settings.output_root, kind)
    logger.info("Writing %d %s file paths to %s", len(paths), kind, export_path)

    overwrite(store, export_path, json.dumps(paths, indent=4))

    notify(f"Wrote list of {kind} files to {store.base_path}/{export_path}")
    return export_path
