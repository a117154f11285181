"""Allow ``python -m fastform``."""

import sys

from fastform.cli import main

if __name__ == "__main__":
    sys.exit(main())
