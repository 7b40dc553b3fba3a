"""Application entry point for the Kanban board backend server."""

from kanban.app import App
from kanban.config import Config
from kanban.logging import setup_logging
from kanban.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
