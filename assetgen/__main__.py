"""
Main entry point for running the package as a module.

Usage:
    python -m assetgen check --platform ios
    python -m assetgen generate --platform android --show-files
    python -m assetgen report --platform ios --type plan
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
