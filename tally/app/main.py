"""Tally - Main application entry point."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tally.app.state import AppContainer
from tally.shared.core.configuration import LoggingConfig, SystemConfig, get_config
from tally.shared.core.event_bus import EventBus
from tally.shared.infrastructure.persistence import ItemStore

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

logger = logging.getLogger(__name__)

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(log_config: LoggingConfig, root: Path = PROJECT_ROOT) -> Path:
    """Install the file and console handlers on the root logger.

    File handler: everything at the configured level, rotated.
    Console handler: only the console level and above (WARNING by default).

    Returns:
        Path of the log file
    """
    logs_dir = Path(log_config.log_dir)
    if not logs_dir.is_absolute():
        logs_dir = root / logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = logs_dir / "tally.log"

    file_log_level = LOG_LEVEL_MAP.get(log_config.level.upper(), logging.DEBUG)
    console_log_level = LOG_LEVEL_MAP.get(log_config.console_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=log_config.max_bytes,
        backupCount=log_config.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_log_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("flet").setLevel(logging.WARNING)
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logger.info(f"Logging configured: file={log_file_path}, console={log_config.console_level}+")
    return log_file_path


def build_app(config: Optional[SystemConfig] = None, event_bus: Optional[EventBus] = None) -> AppContainer:
    """Composition root: create the item store and inject it into app state."""
    config = config or SystemConfig()
    item_store = ItemStore.with_seed_data() if config.store.seed_on_start else ItemStore()
    return AppContainer(event_bus or EventBus(), item_store, store_config=config.store)


async def run(app: AppContainer) -> None:
    """Headless session: load the inventory and report it."""
    fetch = app.inventory.initialize()
    if fetch is not None:
        await fetch
    await app.inventory.wait_until_idle()

    for item in app.inventory.items.value:
        logger.info(f"{item.emoji} {item.name}: {item.quantity}")
    logger.info(f"{len(app.inventory.items.value)} items loaded")


def main() -> None:
    load_dotenv(dotenv_path=Path(os.getenv("TALLY_ENV_FILE", PROJECT_ROOT / ".env")))
    config = get_config()
    configure_logging(config.logging)
    asyncio.run(run(build_app(config)))


if __name__ == "__main__":
    main()
