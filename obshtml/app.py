from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from obshtml.di.container import Container
from obshtml.plugins.builtin.obshtml_plugin import (
    ACTION_EXPORT,
    ACTION_LIST_ALL,
    ACTION_LIST_MARKDOWN,
)
from obshtml.services.config.ini_config_service import IniConfigService
from obshtml.utils.constants import APP_NAME, APP_ORG

logger = logging.getLogger(__name__)

COMMANDS = {
    "export": ACTION_EXPORT,
    "list-markdown": ACTION_LIST_MARKDOWN,
    "list-all": ACTION_LIST_ALL,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obshtml",
        description="Export a markdown vault to HTML through the editor preview.",
    )
    parser.add_argument("vault", help="Vault folder.")
    parser.add_argument(
        "--command",
        choices=sorted(COMMANDS),
        help="Run one command without opening the window, then exit.",
    )
    parser.add_argument("--config", help="INI file overriding the default configuration.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(argv: Sequence[str]) -> int:
    """
    Bootstraps Qt, composes the application via the DI container, then either
    runs a single command headless or shows the main window.
    """
    args = build_arg_parser().parse_args(list(argv[1:]))
    configure_logging(args.verbose)

    vault_root = Path(args.vault).expanduser()
    if not vault_root.is_dir():
        logger.error("Vault folder not found: %s", vault_root)
        return 2

    QApplication.setOrganizationName(APP_ORG)
    QApplication.setApplicationName(APP_NAME)
    app = QApplication.instance() or QApplication([argv[0]])

    config = IniConfigService(
        explicit_path=Path(args.config) if args.config else None,
        vault_root=vault_root,
    )
    container = Container(vault_root, config=config)
    plugins = container.load_plugins()

    if args.command:
        try:
            plugins.run_action(COMMANDS[args.command])
        finally:
            plugins.shutdown()
        return 0

    win = container.build_main_window()
    win.show()
    code = app.exec()
    plugins.shutdown()
    return code
