# scaling_controller/run_api.py
"""Serve the read-only status API."""

import logging

import uvicorn

from scaling_controller.controller.config import ControllerSettings


def main():
    settings = ControllerSettings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    uvicorn.run(
        "scaling_controller.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
