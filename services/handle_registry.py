"""
Handle registry.

Tracks which Shopify handles are taken in one migration run so new and
renamed products never collide. One registry is seeded per run and passed
to whatever issues handles.
"""

import re
import time
from typing import Iterable, Optional
import structlog

from utils.text_utils import make_handle

logger = structlog.get_logger(__name__)


class HandleRegistry:
    """Set of used handles with collision-free reservation."""

    def __init__(self, existing: Iterable[str] = ()):
        self._used: set[str] = set()
        self.seed(existing)

    def __len__(self) -> int:
        return len(self._used)

    def __contains__(self, handle: object) -> bool:
        return handle in self._used

    def seed(self, handles: Iterable[str]) -> int:
        """
        Mark existing handles as used.

        Returns:
            Number of handles newly added
        """
        before = len(self._used)
        self._used.update(h for h in handles if h)
        added = len(self._used) - before
        logger.debug("handles_seeded", added=added, total=len(self._used))
        return added

    def is_used(self, handle: str) -> bool:
        return handle in self._used

    def reserve(self, handle: str) -> str:
        """
        Reserve a handle, suffixing -1, -2, ... until it is free.

        Returns:
            The handle actually reserved
        """
        unique = handle
        counter = 1
        while unique in self._used:
            unique = f"{handle}-{counter}"
            counter += 1

        self._used.add(unique)
        return unique

    def generate(
        self,
        title: str,
        sku: Optional[str] = None,
        source_type: Optional[str] = None,
    ) -> str:
        """
        Generate and reserve a handle for a product title.

        Falls back to the SKU, or the source type, plus a timestamp
        fragment when the title yields fewer than two usable characters.
        """
        base = make_handle(title)
        if len(base) < 2:
            base = self._fallback_handle(sku, source_type)
        return self.reserve(base)

    @staticmethod
    def _fallback_handle(sku: Optional[str], source_type: Optional[str]) -> str:
        timestamp = str(int(time.time() * 1000))

        if sku:
            normalized_sku = re.sub(r"[^a-z0-9]", "-", sku.lower())
            return f"{normalized_sku}-{timestamp[-6:]}"

        source = (source_type or "product").lower()
        return f"{source}-{timestamp[-8:]}"
