#!/usr/bin/env python3
"""
run.py - Main entry point for multiconnect
"""

import sys

from multiconnect.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
