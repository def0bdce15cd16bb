import threading
from typing import Dict, Iterator, Optional

class ThumbnailCache:
    """In-memory map of video URL to resolved thumbnail URL.

    Keys are matched exactly. Entries live for the lifetime of the process;
    there is no expiry and no size bound.
    """

    def __init__(self, name: str = "thumbnails"):
        self.name = name
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(url)

    def set(self, url: str, thumbnail: str):
        with self._lock:
            self._entries[url] = thumbnail

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._entries))
