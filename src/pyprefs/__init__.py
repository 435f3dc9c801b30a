"""pyprefs: preferences dialog with bound, linkable option lists."""

__version__ = "0.1.0"
