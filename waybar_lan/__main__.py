"""Permet ``python -m waybar_lan``."""

import sys

from waybar_lan.cli import main

if __name__ == "__main__":
    sys.exit(main())
