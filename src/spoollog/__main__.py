"""Allow running spoollog with ``python -m spoollog``."""

import sys

from spoollog.cli import main

if __name__ == "__main__":
    sys.exit(main())
