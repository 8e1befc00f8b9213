"""
Application id generation.
"""

import itertools
import threading
from abc import ABC, abstractmethod

from core.applications.profile import ApplicationId


class ApplicationIdGenerator(ABC):
    """Source of fresh application ids."""

    @abstractmethod
    def next_id(self) -> ApplicationId:
        """Return an id never returned before by this generator."""


class SequentialApplicationIdGenerator(ApplicationIdGenerator):
    """Monotonically increasing ids of the form app-000001, safe across threads."""

    def __init__(self, start: int = 1, prefix: str = "app"):
        if start < 0:
            raise ValueError("start cannot be negative")
        self._counter = itertools.count(start)
        self._prefix = prefix
        self._lock = threading.Lock()

    def next_id(self) -> ApplicationId:
        with self._lock:
            value = next(self._counter)
        return f"{self._prefix}-{value:06d}"
