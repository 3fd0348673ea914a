#!/usr/bin/env python3
"""
Frigate Notify - Bootstrap and entry point.

Run with: frigate-notify (console script) or python -m frigate_notify.main
"""

import logging
import signal
import sys

from frigate_notify.config import load_config
from frigate_notify.constants import LOGGER_NAME
from frigate_notify.logging_utils import setup_logging
from frigate_notify.orchestrator import NotifyOrchestrator

# Early logging for config loading (reconfigured after config is loaded)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %I:%M:%S %p",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(LOGGER_NAME)


def bootstrap(config_path: str | None = None) -> tuple[dict, NotifyOrchestrator]:
    """Load config, set up logging, create and return (config, orchestrator).

    Does not connect to MQTT; call orchestrator.start() for that.
    """
    config = load_config(config_path)
    setup_logging(config.get("LOG_LEVEL", "INFO"))
    orchestrator = NotifyOrchestrator(config)
    return config, orchestrator


def main() -> None:
    """Start the orchestrator and block until SIGTERM/SIGINT."""
    try:
        _config, orchestrator = bootstrap()
    except ValueError as e:
        logger.error("%s", e)
        sys.exit(1)

    def _shutdown_handler(signum: int, frame) -> None:
        logger.info("Received signal %s, shutting down...", signum)
        orchestrator.stop()

    signal.signal(signal.SIGTERM, _shutdown_handler)
    signal.signal(signal.SIGINT, _shutdown_handler)

    orchestrator.start()
    orchestrator.wait()


if __name__ == "__main__":
    main()
