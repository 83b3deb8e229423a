"""Page storage, LRU-K replacement, a buffer pool, catalog types and B+ tree page layouts."""

__version__ = "0.1.0"