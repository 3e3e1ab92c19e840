"""Allow running FocusDesk as a module: python -m focusdesk.

    python -m focusdesk            # desktop window (default)
    python -m focusdesk serve      # REST API only
"""

import argparse
import logging
import sys

from .database.db import configure_engine, init_db
from .settings import load_settings

logger = logging.getLogger("focusdesk")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="focusdesk", description="Personal productivity dashboard")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("gui", help="open the desktop window (default)")
    serve = sub.add_parser("serve", help="run the REST API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--debug", action="store_true")
    return parser


def _run_gui(settings) -> int:
    from PyQt6.QtWidgets import QApplication

    from .app import FocusDeskApp

    app = QApplication(sys.argv)
    app.setApplicationName("FocusDesk")
    app.setOrganizationName("FocusDesk")

    window = FocusDeskApp(settings)
    window.show()
    return app.exec()


def _run_server(settings, args) -> int:
    from .api.server import create_app

    host = args.host or settings.api_host
    port = args.port or settings.api_port
    app = create_app(settings)
    logger.info("Server running on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=args.debug)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    if settings.database_url:
        configure_engine(settings.database_url)
    init_db()

    if args.command == "serve":
        sys.exit(_run_server(settings, args))
    sys.exit(_run_gui(settings))


if __name__ == "__main__":
    main()
