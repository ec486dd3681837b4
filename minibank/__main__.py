"""Main entry point for the registration console"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
