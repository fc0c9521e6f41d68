"""
Redis weights cache for sharing the weight table across services.

Publishes the engine's current weights so that other services scoring
the same visitors can apply an identical table. The engine itself never
reads from here.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Mapping, Optional

import redis

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS_KEY = "fingerprint:weights"


class WeightsCache:
    """
    Publishes and reads a weight table in Redis.

    The table is stored as a JSON object under ``key`` with the publish
    time under ``{key}:updated_at``.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 1,
        password: str = "",
        key: str = DEFAULT_WEIGHTS_KEY,
    ):
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.key = key
        self._redis: Optional[redis.Redis] = None

    @property
    def updated_key(self) -> str:
        return f"{self.key}:updated_at"

    def connect(self) -> bool:
        """Connect to Redis."""
        try:
            self._redis = redis.Redis(
                host=self.host,
                port=self.port,
                db=self.db,
                password=self.password if self.password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            self._redis.ping()
            logger.info(f"Weights cache connected to Redis at {self.host}:{self.port}")
            return True
        except redis.RedisError as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self._redis = None
            return False

    def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            try:
                self._redis.close()
            except redis.RedisError as e:
                logger.debug(f"Error closing Redis connection: {e}")
            self._redis = None

    def publish_weights(self, weights: Mapping[str, float]) -> bool:
        """
        Publish a weight table.

        Returns:
            True if successful
        """
        if not self._redis:
            logger.error("Redis not connected")
            return False

        try:
            self._redis.set(self.key, json.dumps(dict(weights)))
            self._redis.set(self.updated_key, datetime.utcnow().isoformat())
            logger.info(f"Published weights for {len(weights)} signals")
            return True
        except redis.RedisError as e:
            logger.error(f"Failed to publish weights: {e}")
            return False

    def get_weights(self) -> Optional[Dict[str, float]]:
        """Read the published weight table, or None if absent."""
        if not self._redis:
            return None

        try:
            data = self._redis.get(self.key)
            if data:
                return {name: float(value) for name, value in json.loads(data).items()}
        except (redis.RedisError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            logger.error(f"Error loading weights: {e}")

        return None

    def get_last_updated(self) -> Optional[datetime]:
        """Get when the weights were last published."""
        if not self._redis:
            return None

        try:
            data = self._redis.get(self.updated_key)
            if data:
                return datetime.fromisoformat(data)
        except (redis.RedisError, ValueError) as e:
            logger.debug(f"Error reading weights timestamp: {e}")

        return None
