"""Main entry point for the Character Validator web server."""

import logging
import sys
import io
from pathlib import Path
from typing import Optional

import uvicorn

from character_validator.config import ConfigLoader, SystemConfig


def configure_console():
    """Switch stdout/stderr to UTF-8 on Windows, where tree markers would not encode."""
    if sys.platform != 'win32':
        return
    for stream in (sys.stdout, sys.stderr):
        if isinstance(stream, io.TextIOWrapper):
            stream.reconfigure(encoding='utf-8', errors='replace')


def setup_logging(debug: bool = False):
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO

    configure_console()

    handlers = [logging.StreamHandler(sys.stdout)]

    file_handler = None
    log_file = None

    # Add file handler if debug mode is enabled
    if debug:
        from datetime import datetime
        log_dir = Path("data/debug_logs/server")
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"server_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(file_handler)

    # Set root logger to INFO to avoid verbose library logs
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True  # Force reconfiguration even if already configured
    )

    # Only set DEBUG for our app loggers, not third-party libraries
    app_logger = logging.getLogger('character_validator')
    app_logger.setLevel(level)

    # Silence noisy third-party loggers
    logging.getLogger('multipart').setLevel(logging.WARNING)
    logging.getLogger('python_multipart').setLevel(logging.WARNING)

    startup_logger = logging.getLogger(__name__)
    if debug:
        startup_logger.info(f"[STARTUP] Server log file: {log_file}")
    startup_logger.info(f"[STARTUP] Logging configured: level={logging.getLevelName(level)}")

    return file_handler, log_file


def load_config(config_path: Optional[Path] = None) -> SystemConfig:
    """Load the system config, falling back to defaults when it is unusable."""
    try:
        return ConfigLoader().load_system_config(config_path)
    except Exception as e:
        # Use basic logging since logger isn't configured yet
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        logging.getLogger(__name__).warning(f"[STARTUP WARNING] Could not load system config: {e}, using defaults")
        return SystemConfig()


def run_server(system_config: SystemConfig):
    """Run the FastAPI server with logging configured from ``system_config``."""
    setup_logging(debug=system_config.debug)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting Character Validator server (debug mode: {system_config.debug})...")
    logger.info(f"Server will listen on {system_config.api_host}:{system_config.api_port}")

    from character_validator.api.app import app, app_state
    app_state["system_config"] = system_config

    uvicorn.run(
        app,
        host=system_config.api_host,
        port=system_config.api_port,
        reload=False,
        log_level="info",
        log_config=None,  # Don't modify uvicorn's log config - use our basicConfig
    )


def main():
    """Run the FastAPI server."""
    run_server(load_config())


if __name__ == "__main__":
    main()
