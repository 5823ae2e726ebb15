"""Tiling window manager state, gap-aware layouts, a menu engine, status-bar markup and a file filter."""

__version__ = "0.1.0"