"""
Fingerprint Engine - Entry point.

Samples host signals and prints the weighted visitor fingerprint as JSON.
"""

import asyncio
import json
import logging
import sys

from .config import Settings
from .engine import FingerprintEngine
from .exceptions import DegenerateEntropyError
from .weights_cache import WeightsCache

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # Logs go to stderr; stdout carries the fingerprint JSON
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


async def run(settings: Settings) -> dict:
    """Build the engine, optionally adapt weights, and generate a fingerprint."""
    engine = FingerprintEngine.from_settings(settings)
    logger.info(f"Engine ready: {engine}")

    if settings.adjust_on_start:
        try:
            await engine.adjust_weights()
        except DegenerateEntropyError as e:
            logger.warning(f"Keeping configured weights: {e}")

    fingerprint = await engine.generate_fingerprint()

    if settings.weights_cache_enabled:
        cache = WeightsCache(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            key=settings.weights_cache_key,
        )
        if cache.connect():
            cache.publish_weights(engine.get_weights())
            cache.close()

    return fingerprint.to_dict()


def main():
    """Main entry point."""
    settings = None
    try:
        settings = Settings()
        configure_logging(settings.log_level)
        logger.info("Loaded configuration from environment")

        result = asyncio.run(run(settings))
        print(json.dumps(result, indent=2))

    except Exception as e:
        if settings is None:
            configure_logging()
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
