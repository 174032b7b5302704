#!/usr/bin/env python3
"""
Allow running commitguard as a module: python -m commitguard
"""

from commitguard.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
