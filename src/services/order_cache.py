"""In-memory TTL cache mapping payment order ids to cart snapshots."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from threading import Lock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.schemas.checkout import CartItem

logger = logging.getLogger(__name__)


@dataclass
class CachedOrder:
    """Cart snapshot held for a created payment order."""

    order_id: str
    amount: int
    currency: str
    cart_items: list[CartItem]
    expires_at: float
    created_at: float = field(default_factory=time.time)

    def is_expired(self) -> bool:
        """Check if this entry has expired."""
        return time.time() > self.expires_at


@dataclass
class OrderCacheConfig:
    """Configuration for the order cache."""

    max_size: int = 1000
    ttl_seconds: int = 86400
    cleanup_interval_seconds: int = 600

    @classmethod
    def from_settings(cls) -> "OrderCacheConfig":
        """Create config from application settings."""
        from src.core.config import get_settings
        settings = get_settings()
        return cls(
            max_size=settings.order_cache_max_size,
            ttl_seconds=settings.order_cache_ttl_seconds,
            cleanup_interval_seconds=settings.order_cache_cleanup_interval_seconds,
        )


class OrderCache:
    """Thread-safe in-memory store of carts keyed by order id.

    Entries are written once at order creation and read on every bundle
    download. They are dropped when their TTL elapses or, at capacity,
    oldest first.
    """

    def __init__(self, config: OrderCacheConfig | None = None) -> None:
        """Initialize the order cache.

        Args:
            config: Optional cache configuration.
        """
        self.config = config or OrderCacheConfig()
        self._cache: dict[str, CachedOrder] = {}
        self._lock = Lock()
        self._cleanup_task: asyncio.Task | None = None

    async def start_cleanup_task(self) -> None:
        """Start background cleanup task."""
        if self._cleanup_task is None:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.info("Order cache cleanup task started")

    async def stop_cleanup_task(self) -> None:
        """Stop background cleanup task."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
            logger.info("Order cache cleanup task stopped")

    async def _cleanup_loop(self) -> None:
        """Background loop to cleanup expired entries."""
        while True:
            await asyncio.sleep(self.config.cleanup_interval_seconds)
            count = self.cleanup()
            if count > 0:
                logger.debug("Order cache cleaned up %d expired entries", count)

    def get(self, order_id: str) -> CachedOrder | None:
        """Get the cached order if present and not expired.

        Args:
            order_id: Payment provider order id.

        Returns:
            CachedOrder or None if not found/expired.
        """
        with self._lock:
            entry = self._cache.get(order_id)
            if entry is None:
                return None

            if entry.is_expired():
                logger.debug("Order %s expired from cache", order_id)
                del self._cache[order_id]
                return None

            return entry

    def put(
        self,
        order_id: str,
        amount: int,
        currency: str,
        cart_items: list[CartItem],
    ) -> CachedOrder:
        """Cache the cart snapshot for a newly created order.

        Args:
            order_id: Payment provider order id.
            amount: Charged amount in currency subunits.
            currency: Currency code.
            cart_items: Cart items in client order.

        Returns:
            CachedOrder: The stored entry.
        """
        entry = CachedOrder(
            order_id=order_id,
            amount=amount,
            currency=currency,
            cart_items=list(cart_items),
            expires_at=time.time() + self.config.ttl_seconds,
        )

        with self._lock:
            if order_id not in self._cache and len(self._cache) >= self.config.max_size:
                self._evict_oldest()

            self._cache[order_id] = entry
            logger.debug("Cached order %s (expires in %ds)", order_id, self.config.ttl_seconds)

        return entry

    def _evict_oldest(self) -> None:
        """Evict oldest entries to make room. Must be called with lock held."""
        expired_keys = [k for k, v in self._cache.items() if v.is_expired()]
        for key in expired_keys:
            del self._cache[key]

        # If still at capacity, remove oldest 10%
        if len(self._cache) >= self.config.max_size:
            sorted_entries = sorted(
                self._cache.items(),
                key=lambda x: x[1].created_at
            )
            to_remove = max(1, len(self._cache) // 10)
            for key, _ in sorted_entries[:to_remove]:
                del self._cache[key]
            logger.warning("Evicted %d orders from full order cache", to_remove)

    def cleanup(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            expired_keys = [k for k, v in self._cache.items() if v.is_expired()]
            for key in expired_keys:
                del self._cache[key]
            return len(expired_keys)

    def clear(self) -> int:
        """Clear all cached entries.

        Returns:
            Number of entries cleared.
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            logger.info("Cleared %d entries from order cache", count)
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> dict:
        """Get cache statistics for monitoring."""
        with self._lock:
            valid_count = sum(1 for v in self._cache.values() if not v.is_expired())
            return {
                "total_entries": len(self._cache),
                "valid_entries": valid_count,
                "expired_entries": len(self._cache) - valid_count,
                "max_size": self.config.max_size,
                "ttl_seconds": self.config.ttl_seconds,
            }


# Global singleton instance
_order_cache: OrderCache | None = None


def get_order_cache() -> OrderCache:
    """Get or create the global order cache instance."""
    global _order_cache
    if _order_cache is None:
        _order_cache = OrderCache(OrderCacheConfig.from_settings())
    return _order_cache


async def init_order_cache() -> OrderCache:
    """Initialize order cache with cleanup task. Call at app startup."""
    cache = get_order_cache()
    await cache.start_cleanup_task()
    return cache


async def shutdown_order_cache() -> None:
    """Shutdown order cache cleanup task. Call at app shutdown."""
    global _order_cache
    if _order_cache:
        await _order_cache.stop_cleanup_task()
