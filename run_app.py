#!/usr/bin/env python
"""Entry point for the Dash Player Explorer.

Usage
-----
    python run_app.py --data path/to/nba_stats.csv [--width 720 --height 400]
"""

from __future__ import annotations

import argparse

from loguru import logger

from player_explorer.config import ExplorerConfig
from player_explorer.io import load_entities
from player_explorer.logging_utils import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Launch the Player Explorer web app")
    parser.add_argument(
        "--data", required=True,
        help="Path to the player stats CSV (NAME, TEAM, POS + metric columns)",
    )
    parser.add_argument(
        "--width", type=float, default=ExplorerConfig.width,
        help="Scatter plot area width in px (default: %(default)s)",
    )
    parser.add_argument(
        "--height", type=float, default=ExplorerConfig.height,
        help="Scatter plot area height in px (default: %(default)s)",
    )
    parser.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port", type=int, default=8050,
        help="Port to serve on (default: 8050)",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Run Dash in debug mode",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)

    store = load_entities(args.data)
    config = ExplorerConfig(width=args.width, height=args.height)

    logger.info("Starting Dash app on http://{}:{}/", args.host, args.port)

    from player_explorer.app import create_app
    app = create_app(store, config)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
