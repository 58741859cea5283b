"""Cache key builders for consistent key formatting."""


class CacheKeys:
    """Cache key builders for consistent key formatting."""

    PREFIX = "catalogsync"

    @classmethod
    def record(cls, record_id: int | str) -> str:
        """Key for a product record by its database ID."""
        return f"{cls.PREFIX}:product:{int(record_id)}"
