# scaling_controller/run_controller.py
"""Run the scaling controller."""

import logging
import signal
import sys

from scaling_controller.container import build_controller
from scaling_controller.controller.config import ControllerSettings
from scaling_controller.controller.controller import Controller
from scaling_controller.core.errors import ControllerStartupError, PublishError, StoreReadError

logger = logging.getLogger(__name__)


def startup(settings: ControllerSettings) -> Controller:
    """
    Build the controller and verify its collaborators are reachable.

    Raises ControllerStartupError on any failure.
    """
    try:
        controller = build_controller(settings)
        controller.repo.ping()
        controller.dispatcher.ping()
    except (StoreReadError, PublishError) as e:
        raise ControllerStartupError(str(e)) from e
    except Exception as e:
        raise ControllerStartupError(f"{type(e).__name__}: {e}") from e
    return controller


def main() -> int:
    """Main entry point."""
    settings = ControllerSettings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger.info("=" * 60)
    logger.info("SCALING CONTROLLER")
    logger.info("=" * 60)

    try:
        controller = startup(settings)
    except ControllerStartupError as e:
        logger.critical(f"Startup failed: {e}")
        return 1

    def signal_handler(sig, frame):
        """Handle Ctrl+C / SIGTERM gracefully."""
        logger.info(f"Received signal {sig}, shutting down...")
        controller.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    controller.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
