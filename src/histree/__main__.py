"""Allow running histree as ``python -m histree``."""

import sys

from histree.cli import main

if __name__ == "__main__":
    sys.exit(main())
