"""Application entry point for EntryDesk registration server."""

from entrydesk.app import App
from entrydesk.config import Config
from entrydesk.logging import setup_logging
from entrydesk.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
