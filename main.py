"""
main.py — Development server launcher
======================================
    python main.py

Settings come from algoviz.config.Config with ALGOVIZ_* environment
overrides (ALGOVIZ_HOST, ALGOVIZ_PORT, ALGOVIZ_DEBUG, ALGOVIZ_LOG_LEVEL, …).
"""

import logging

from algoviz.config import Config
from algoviz.server import create_app


def main() -> None:
    config = Config.from_env()
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app = create_app(config)
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
