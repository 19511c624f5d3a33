"""Client-side state schemas."""
from .filters import ALL, TaskFilters

__all__ = ["ALL", "TaskFilters"]
