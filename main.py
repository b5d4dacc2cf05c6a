"""Application entry point."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from config import load_config
from core import ConfigurationError, setup_logger
from core.app_initializer import ApplicationInitializer


async def main() -> None:
    """Main application entry point."""
    app = ApplicationInitializer()
    await app.initialize()
    await app.run()


def run() -> None:
    config = load_config()
    logger = setup_logger(
        level=config.log_level,
        log_file=str(Path(config.log_folder) / "app.log"),
        colored=True,
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
