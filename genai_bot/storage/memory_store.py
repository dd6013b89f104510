import copy
import threading
from typing import Any, Dict, Optional

from .base import Storage


class MemoryStorage(Storage):
    kind = "memory"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Any] = {}

    def put(self, key: str, obj: Any) -> None:
        # Copy on the way in and out so callers never share mutable state.
        with self._lock:
            self._data[key] = copy.deepcopy(obj)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            if key not in self._data:
                return None
            return copy.deepcopy(self._data[key])

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
