"""Protean Engine runner for the foodcourt domain.

Only needed when ``event_processing = "async"`` (the production overlay):
the Engine picks up OrderPlaced and OrderConfirmed from the outbox and runs
the cart-clearing and confirmation-email handlers.

Usage:
    PROTEAN_ENV=production python src/server.py
    python src/server.py --test-mode   # Drain pending messages and exit
"""

import argparse

from protean.server.engine import Engine

from foodcourt.domain import foodcourt
from foodcourt.utils.logging import configure_logging


def main():
    parser = argparse.ArgumentParser(description="FoodCourt Engine runner")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Process pending messages once and exit",
    )
    args = parser.parse_args()

    configure_logging()
    foodcourt.init()

    engine = Engine(foodcourt, test_mode=args.test_mode)
    engine.run()


if __name__ == "__main__":
    main()
