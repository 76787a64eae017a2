"""kubepulse: unified health view of cluster workloads."""

__version__ = "0.1.0"
