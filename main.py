"""
Main application entry point for Sentirax Downloader
"""
import os
import sys

# Disable Qt's automatic DPI scaling for consistent pixel sizes across displays
os.environ.setdefault("QT_SCALE_FACTOR", "1")

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler

from sentirax import __version__
from sentirax.core.config import AppConfig


# Qt message handler to route Qt warnings into logging
def qt_message_handler(mode, context, message):
    """Forward Qt messages to logging, dropping known harmless ones."""
    if "QFont::setPointSize: Point size <= 0" in message:
        return

    if mode == QtMsgType.QtDebugMsg:
        logging.debug(f"Qt: {message}")
    elif mode == QtMsgType.QtInfoMsg:
        logging.info(f"Qt: {message}")
    elif mode == QtMsgType.QtWarningMsg:
        logging.warning(f"Qt: {message}")
    elif mode == QtMsgType.QtCriticalMsg:
        logging.error(f"Qt: {message}")
    elif mode == QtMsgType.QtFatalMsg:
        logging.critical(f"Qt: {message}")


# Setup logging
def setup_logging(config: AppConfig):
    """Configure application logging"""
    from sentirax.utils.logging_config import setup_logging as setup_categorized_logging

    logging_manager = setup_categorized_logging(config.log_dir, config.log_levels)

    qInstallMessageHandler(qt_message_handler)

    logger = logging.getLogger(__name__)
    logger.info("=" * 50)
    logger.info(f"Sentirax Downloader {__version__} Starting")
    logger.info("=" * 50)

    return logging_manager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentirax",
        description="Download media from a pasted link. Without a command, starts the desktop app.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Serve the browser version only")
    serve.add_argument("--host", help="Bind address (default: SENTIRAX_HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port (default: PORT or 5173)")
    serve.add_argument("--web-root", type=Path, help="Directory holding index.html, results.html and app.js")
    return parser


def serve(config: AppConfig, args: argparse.Namespace) -> int:
    """Run the static asset server in the foreground."""
    from sentirax.core.static_server import StaticAssetServer

    logger = logging.getLogger(__name__)
    server = StaticAssetServer(
        args.web_root or config.web_root,
        host=args.host or config.host,
        port=args.port if args.port is not None else config.port,
    )
    try:
        server.run()
    except OSError as e:
        logger.error(f"Could not start web server: {e}")
        return 1
    return 0


async def async_main(config: AppConfig):
    """Async main function with Qt event loop integration"""
    logger = logging.getLogger(__name__)

    try:
        from PyQt6.QtWidgets import QApplication
        from sentirax.core import CoreContext
        from sentirax.ui.main_window import MainWindow

        app = QApplication.instance()

        logger.info("Initializing core context...")
        core = CoreContext(config)
        # Keep reference for shutdown before anything else can fail
        app._core_context = core

        web_url = core.start_static_server()

        logger.info("Creating main window...")
        main_window = MainWindow(core, web_url=web_url)
        main_window.show()

        logger.info("Application started successfully")

        # Keep reference to prevent garbage collection
        app._main_window = main_window

    except Exception as e:
        logger.exception(f"Fatal error during startup: {e}")
        sys.exit(1)


def run_gui(config: AppConfig) -> int:
    logger = logging.getLogger(__name__)

    from PyQt6.QtWidgets import QApplication
    import qasync

    app = None
    try:
        app = QApplication(sys.argv)
        app.setApplicationName("Sentirax Downloader")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("Sentirax")

        loop = qasync.QEventLoop(app)
        asyncio.set_event_loop(loop)

        logger.info("Starting application with asyncio event loop integration")

        app_close_event = asyncio.Event()
        app.aboutToQuit.connect(app_close_event.set)

        with loop:
            loop.run_until_complete(async_main(config))
            loop.run_until_complete(app_close_event.wait())

    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1
    finally:
        logger.info("Shutting down...")
        if app is not None and hasattr(app, "_core_context"):
            app._core_context.close()
        logger.info("Application closed")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    args = build_parser().parse_args(argv)
    config = AppConfig.from_env()
    setup_logging(config)

    if args.command == "serve":
        return serve(config, args)
    return run_gui(config)


if __name__ == "__main__":
    sys.exit(main())
