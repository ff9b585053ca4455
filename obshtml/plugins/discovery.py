from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from importlib.metadata import entry_points

from obshtml.plugins.api import ENTRYPOINT_GROUP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredPlugin:
    """
    A discovered plugin factory.

    - factory: a callable returning an IPlugin instance (or an instance itself)
    - entry_point_name: stable identifier for the discovery source
    """

    factory: object
    entry_point_name: str


def _discover_builtin_plugins() -> Iterable[DiscoveredPlugin]:
    from obshtml.plugins.builtin.obshtml_plugin import ObsHtmlPlugin

    yield DiscoveredPlugin(
        factory=ObsHtmlPlugin,
        entry_point_name="builtin:org.obshtml.companion",
    )


def _discover_entrypoint_plugins() -> Iterable[DiscoveredPlugin]:
    """Third-party plugins discovered via Python entry points."""
    for ep in entry_points(group=ENTRYPOINT_GROUP):
        try:
            factory = ep.load()
        except Exception:
            # A broken entry point should not break the app.
            logger.exception("Failed to load plugin entry point %s", ep.name)
            continue

        yield DiscoveredPlugin(factory=factory, entry_point_name=str(ep.name))


def discover_plugins() -> Iterable[DiscoveredPlugin]:
    """
    Built-in plugins first, then entry points, so ordering (and therefore the
    host's menus) is deterministic.
    """
    yield from _discover_builtin_plugins()
    yield from _discover_entrypoint_plugins()
