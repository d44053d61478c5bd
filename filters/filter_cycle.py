"""
Filter Cycle
============
Tracks the active filter index. Every move wraps modulo the list length.
"""

from config import LABEL_SUFFIX


class FilterCycle:
    """Cyclic cursor over an ordered list of filter descriptors"""

    def __init__(self, filters, index: int = 0):
        if not filters:
            raise ValueError("FilterCycle needs at least one filter")
        self.filters = list(filters)
        self.index = index % len(self.filters)

    @property
    def current(self):
        return self.filters[self.index]

    def next(self):
        self.index = (self.index + 1) % len(self.filters)
        return self.current

    def previous(self):
        self.index = (self.index - 1) % len(self.filters)
        return self.current

    def select(self, index: int):
        self.index = index % len(self.filters)
        return self.current

    def label(self) -> str:
        """HUD text for the active filter."""
        return f"{self.current.name}{LABEL_SUFFIX}"

    def __len__(self):
        return len(self.filters)
