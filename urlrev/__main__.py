"""
Main entry point for the urlrev package.

Allows running the CLI as: python -m urlrev
"""

import sys

from urlrev.cli import main

if __name__ == "__main__":
    sys.exit(main())
