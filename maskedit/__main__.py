#!/usr/bin/env python3
"""
maskedit entry point for running as a module: python3 -m maskedit
"""

import sys
from maskedit.cli import main

if __name__ == '__main__':
    sys.exit(main())
