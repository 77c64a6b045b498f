#!/usr/bin/env python3
"""
PhongForge - A Python Whitted-style Ray Tracer

Main entry point for rendering scenes.
"""

import sys

from phongforge.cli import main


if __name__ == '__main__':
    sys.exit(main())
