"""linkbridge - symlink-backed preview libraries for media catalogs."""

__version__ = "1.0.0"
