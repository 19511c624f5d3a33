"""TaskFlow: task management core backed by a remote record store."""

__version__ = "0.1.0"
