#!/usr/bin/env python3
"""pomod entry point.

Run with:
    python main.py
    python -m pomod
"""

import sys

from pomod.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
