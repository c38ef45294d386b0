"""Gateway clients."""

from cryptocloud.client.cached_client import CachedCryptocloudClient
from cryptocloud.client.cryptocloud_client import CryptocloudClient

__all__ = ["CachedCryptocloudClient", "CryptocloudClient"]
