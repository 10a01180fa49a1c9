"""Tools for working with the fastresume data in qBittorrent's SQLite database."""

__version__ = "0.3.2"

__all__ = ["__version__"]