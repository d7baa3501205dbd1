"""
CLI entry point for srpatch.

This allows the tool to be run as:
    python -m srpatch --file myfile.py --patch change.txt
"""

import sys
from .patcher import main

if __name__ == "__main__":
    sys.exit(main())
