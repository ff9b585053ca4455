"""Concrete service implementations: vault, rendering, export, shell."""
