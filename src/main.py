# src/main.py
"""Launch the special relativity lab: ``python src/main.py``."""

import sys

from relativity_lab.app import main

if __name__ == "__main__":
    sys.exit(main())
