"""FoodCourt database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Load a demo restaurant, menu, and customer
"""

import argparse
import json
import sys

from foodcourt.domain import foodcourt
from foodcourt.utils.db import drop_db, seed_db, setup_db


def main():
    parser = argparse.ArgumentParser(description="FoodCourt database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load demo data")

    args = parser.parse_args()

    foodcourt.init()

    if args.command == "setup-db":
        setup_db(foodcourt)
        print("foodcourt schema ready.")
    elif args.command == "drop-db":
        drop_db(foodcourt)
        print("foodcourt schema dropped.")
    elif args.command == "seed":
        print(json.dumps(seed_db(foodcourt), indent=2))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
