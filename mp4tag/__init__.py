"""Read and write iTunes-style metadata tags in MP4 files."""

__version__ = "0.1.0"
__all__ = ["objects", "utils", "reader", "merge", "atoms", "writer", "mp4"]