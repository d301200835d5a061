"""Key-value stores for quota persistence.

The quota tracker only needs two string values (a count and a date stamp), so every
backend exposes a minimal get/set interface. Failures surface as QuotaStoreError so the
tracker can decide how to degrade.
"""

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

import redis
import yaml

logger = logging.getLogger(__name__)


class QuotaStoreError(Exception):
    """Raised when a quota store cannot be read or written."""


class KeyValueStore(ABC):
    """Abstract base class for quota stores."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a value by key.

        Args:
            key: Key to retrieve

        Returns:
            Stored value or None if the key is not set

        Raises:
            QuotaStoreError: If the backend is unavailable
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value under a key.

        Args:
            key: Key to write
            value: Value to store

        Raises:
            QuotaStoreError: If the backend is unavailable
        """
        pass


class MemoryStore(KeyValueStore):
    """Process-local store, lost on restart."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class YamlFileStore(KeyValueStore):
    """Store that keeps all keys in a single YAML mapping on disk."""

    def __init__(self, path: Path | str):
        """Initialize the store.

        Args:
            path: YAML file holding the mapping; created on first write
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        """Read the mapping; unparseable content is discarded so the next write replaces it.

        Raises:
            QuotaStoreError: If the file exists but cannot be read
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path) as f:
                content = f.read()
        except OSError as e:
            raise QuotaStoreError(f"Failed to read quota state from {self.path}: {e}") from e

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            logger.warning("Discarding unparseable quota state in %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Discarding quota state in %s: not a mapping", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "w") as f:
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
            except (OSError, yaml.YAMLError) as e:
                raise QuotaStoreError(f"Failed to write quota state to {self.path}: {e}") from e


class RedisStore(KeyValueStore):
    """Store backed by a Redis server.

    Values are kept as plain strings so they stay readable with redis-cli.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        host: str = "127.0.0.1",
        port: int = 6379,
        db: int = 0,
        timeout: float = 1.0,
    ):
        """Initialize the Redis store.

        Args:
            client: Existing Redis client; a pooled client is created when None
            host: Redis server host
            port: Redis server port
            db: Redis database number
            timeout: Socket timeout in seconds
        """
        if client is None:
            pool = redis.ConnectionPool(
                host=host,
                port=port,
                db=db,
                socket_connect_timeout=timeout,
                socket_timeout=timeout,
                decode_responses=True,
            )
            client = redis.Redis(connection_pool=pool)
        self.client = client

    def get(self, key: str) -> str | None:
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.error("Redis get error for key '%s': %s", key, e)
            raise QuotaStoreError(f"Redis get failed for '{key}': {e}") from e

        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            logger.error("Redis set error for key '%s': %s", key, e)
            raise QuotaStoreError(f"Redis set failed for '{key}': {e}") from e
