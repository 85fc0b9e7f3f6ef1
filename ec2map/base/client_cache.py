"""
EC2 client cache.

Avoids building a new boto3 client every time the same credentials are
used. The cache is an ordinary object owned by whoever constructs the
facade, so tests and separate callers can keep isolated caches.
"""

from __future__ import annotations

import hashlib
import json
import threading
from typing import Any, Callable

from ec2map.base.config import Credentials


class ClientCache:
    """Thread-safe, in-process cache of clients keyed by credential value."""

    def __init__(self) -> None:
        self._cache: dict[str, Any] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _make_key(credentials: Credentials) -> str:
        """Produce a deterministic key from the full credentials value."""
        # Hash rather than store the secret itself as a dict key.
        serialised = json.dumps(credentials.model_dump(), sort_keys=True, default=str)
        return hashlib.sha256(serialised.encode()).hexdigest()

    def get_or_create(
        self,
        credentials: Credentials,
        factory: Callable[[Credentials], Any],
    ) -> Any:
        """Return the cached client for *credentials* or create one via *factory*.

        Args:
            credentials: Validated credentials.
            factory: Callable(credentials) that builds a new client. If it
                raises, nothing is cached.

        Returns:
            The cached (or newly-created) client.
        """
        key = self._make_key(credentials)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = factory(credentials)
            return self._cache[key]

    def clear(self) -> None:
        """Drop every cached client."""
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
