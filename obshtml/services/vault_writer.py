from __future__ import annotations

import logging

from obshtml.domain.interfaces import IDocumentStore
from obshtml.services.vault_paths import parent_folder

logger = logging.getLogger(__name__)


def create_folder_if_not_exist(store: IDocumentStore, path: str) -> bool:
    """
    Create `path` and any missing ancestors. Returns True if something was created.

    The store's create_folder() is single-level, so ancestors are created first.
    """
    if not path or store.get_entry(path) is not None:
        return False

    parent = parent_folder(path)
    if parent:
        create_folder_if_not_exist(store, parent)

    logger.info("Folder %s does not yet exist, creating...", path)
    store.create_folder(path)
    return True


def overwrite(store: IDocumentStore, path: str, data: str) -> bool:
    """
    Replace whatever lives at `path` with a fresh file holding `data`.

    Idempotent: calling it twice with the same arguments leaves the same single
    entry behind. Store errors propagate to the caller.
    """
    create_folder_if_not_exist(store, parent_folder(path))

    if store.get_entry(path) is not None:
        store.delete(path)

    store.create(path, data)
    return True
