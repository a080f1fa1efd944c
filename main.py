"""
Run a CHIP-8 ROM in a window: python main.py <rom>
"""

import sys

from chipjax.cli import main


if __name__ == "__main__":
    sys.exit(main())
