"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    HTML_TEMPLATE,
    MODE_PREVIEW,
    MODE_SOURCE,
    PLUGIN_NAME,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "PLUGIN_NAME",
    "CSS_PREVIEW",
    "HTML_TEMPLATE",
    "MODE_SOURCE",
    "MODE_PREVIEW",
]
