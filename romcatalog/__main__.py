"""Allow ``python -m romcatalog``."""

import sys

from romcatalog.cli import main

if __name__ == "__main__":
    sys.exit(main())
