#!/usr/bin/env python3
"""
Swipe Listener - Main Entry Point
Maps three and four finger touchpad swipes to keyboard shortcuts.
"""

import sys

from swipe_listener.cli import main

if __name__ == "__main__":
    sys.exit(main())
