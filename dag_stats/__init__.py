"""dag-stats: shape statistics for a rooted reference DAG."""

__version__ = "0.1.0"
