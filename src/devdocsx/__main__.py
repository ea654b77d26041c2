"""Entry point for running devdocsx as a module.

Usage:
    python -m devdocsx <topic>
"""

import sys

from devdocsx.cli import main

if __name__ == "__main__":
    sys.exit(main())
