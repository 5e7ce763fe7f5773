"""
Entry point for running template_helper as a module.

Usage:
    python -m template_helper render data.json hero --mode advanced --media media.json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main() or 0)
