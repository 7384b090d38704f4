"""
Main entry point for the steam boiler scenario replay

Launch with: python main.py scenarios/startup.json

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

import sys

from steam_boiler.cli import main

if __name__ == "__main__":
    sys.exit(main())
