# src/mine_board/__init__.py

"""Shared task board client for a small game-server community."""

__version__ = "0.1.0"
