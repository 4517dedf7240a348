"""Allow running the smoke tests with ``python -m nginx_smoke``."""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
