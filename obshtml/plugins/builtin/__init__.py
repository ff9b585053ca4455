"""Plugins shipped with the app."""
