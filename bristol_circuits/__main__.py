"""
Entry point for the Bristol circuit CLI.
This allows running the module with: python -m bristol_circuits
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
