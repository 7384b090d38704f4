"""
Entry point for the scenario replay tool

Allows running the tool with: python -m steam_boiler scenario.json
"""

import sys

from steam_boiler.cli import main

if __name__ == "__main__":
    sys.exit(main())
