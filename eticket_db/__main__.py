#!/usr/bin/env python3
"""
Entry point for running eticket_db as a module.
This file enables: python -m eticket_db
"""

import sys

from .main import main

if __name__ == '__main__':
    sys.exit(main())
