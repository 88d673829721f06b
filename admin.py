#!/usr/bin/env python3
"""
Run an admin command directly from a checkout, without installing the package.

Usage (from the project root):
  python admin.py build-search-index

Reads .env for Elasticsearch, Redis and data directory settings.
"""
import sys

# Make the vdbadmin package importable from the project root
sys.path.insert(0, ".")


def main() -> None:
    from vdbadmin.cli import main as run

    sys.exit(run())


if __name__ == "__main__":
    main()
