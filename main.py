#!/usr/bin/env python3
"""Hockey Timer — entry point.

Run with:
    python main.py
    python -m hockeytimer
"""

from hockeytimer.__main__ import main


if __name__ == "__main__":
    main()
