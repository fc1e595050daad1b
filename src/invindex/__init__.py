"""
Threaded map/reduce inverted index with letter-partitioned output.
"""

__version__ = "0.1.0"
