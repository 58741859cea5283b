"""Caching decorators for async service methods."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from redis.exceptions import RedisError

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def cached(
    key_builder: Callable[..., str],
    ttl: int | None = None,
    cache_none: bool = False,
):
    """
    Decorator for caching async method results in ``self._cache``.

    A cache outage degrades to a direct call; the database stays the
    source of truth.

    Args:
        key_builder: Function that takes the same args as the decorated method
                    and returns a cache key string.
        ttl: Time to live in seconds. Defaults to ``self._cache_ttl`` or 300.
        cache_none: Whether to cache None results (default False).

    Usage:
        @cached(lambda record_id: CacheKeys.record(record_id))
        async def _load_record(self, record_id: int) -> dict | None:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        async def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
            cache = getattr(self, "_cache", None)
            if cache is None:
                return await func(self, *args, **kwargs)

            key = key_builder(*args, **kwargs)

            try:
                cached_value = await cache.get(key)
            except RedisError as e:
                logger.warning(f"Cache read failed for {key}: {e}")
                return await func(self, *args, **kwargs)
            if cached_value is not None:
                return cached_value

            result = await func(self, *args, **kwargs)

            if result is not None or cache_none:
                expiry = ttl or getattr(self, "_cache_ttl", None) or 300
                try:
                    await cache.set(key, result, ttl=expiry)
                except RedisError as e:
                    logger.warning(f"Cache write failed for {key}: {e}")

            return result

        return wrapper

    return decorator


def cache_invalidate(
    key_builder: Callable[..., str | list[str]],
):
    """
    Decorator that invalidates cache keys after the method returns.

    Args:
        key_builder: Function that returns the cache key(s) to invalidate.

    Usage:
        @cache_invalidate(lambda record_id, *_: CacheKeys.record(record_id))
        async def update_record(self, record_id: int, changes: dict) -> MutationOutcome:
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        async def wrapper(self, *args: P.args, **kwargs: P.kwargs) -> R:
            result = await func(self, *args, **kwargs)

            cache = getattr(self, "_cache", None)
            if cache is not None:
                key = key_builder(*args, **kwargs)
                keys = key if isinstance(key, list) else [key]
                for k in keys:
                    try:
                        await cache.delete(k)
                    except RedisError as e:
                        logger.warning(f"Cache invalidation failed for {k}: {e}")

            return result

        return wrapper

    return decorator
