"""
Command-line entry point for the booking data store.

Usage:
    python main.py init
    python main.py cases --search zhang
    python main.py stats
"""

import sys

from booking_sync.cli import main

if __name__ == "__main__":
    sys.exit(main())
