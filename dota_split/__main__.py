"""
Main entry point for the split tool.

Allows running: python -m dota_split <config>
"""

import sys
from dota_split.processing.runner import main

if __name__ == "__main__":
    sys.exit(main())
