from cryptocloud.infrastructure.cache.memory_cache import CacheItem, CacheKeys, MemoryCache

__all__ = ["CacheItem", "CacheKeys", "MemoryCache"]
