"""CLI entry point for the intel module."""

import sys

from src.intel.cli import main


if __name__ == '__main__':
    sys.exit(main())
