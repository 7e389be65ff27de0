"""Command-line entry point: python -m clicktrack_core <url>"""

import sys

from clicktrack_core.cli import main

if __name__ == '__main__':
    sys.exit(main())
