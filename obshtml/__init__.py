"""Export a markdown vault to rendered HTML, optionally followed by obsidianhtml."""

__version__ = "0.1.0"
