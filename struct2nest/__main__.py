"""Entry point: python -m struct2nest INPUT_DIR"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
