#!/usr/bin/env python3
"""FocusDesk entry point.

Run with:
    python main.py
    python main.py serve
    python -m focusdesk
"""

from focusdesk.__main__ import main


if __name__ == "__main__":
    main()
