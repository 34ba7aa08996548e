"""
Shared media metadata cache.

One cache serves every exam version of a batch, also when versions are
mastered in parallel threads. The first caller for a (src, kind) key
probes; concurrent callers for the same key wait for that result.
"""

from concurrent.futures import Future
from typing import Dict, Tuple
import logging
import threading

from ..models import MediaKind, MediaMetadata
from .collaborators import GetMediaMetadata

logger = logging.getLogger(__name__)


class MediaMetadataCache:
    """Memoizing, thread-safe wrapper around a GetMediaMetadata callable."""

    def __init__(self, get_media_metadata: GetMediaMetadata):
        self._get_media_metadata = get_media_metadata
        self._lock = threading.Lock()
        self._entries: Dict[Tuple[str, str], Future] = {}
        self.probes = 0

    def __call__(self, src: str, kind: MediaKind) -> MediaMetadata:
        key = (src, kind)

        with self._lock:
            entry = self._entries.get(key)
            owner = entry is None
            if owner:
                entry = Future()
                self._entries[key] = entry
                self.probes += 1

        if owner:
            logger.debug(f"Probing {kind} metadata for {src}")
            try:
                entry.set_result(self._get_media_metadata(src, kind))
            except BaseException as e:
                entry.set_exception(e)
                raise

        return entry.result()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
