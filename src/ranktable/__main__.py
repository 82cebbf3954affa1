"""Entry point for running ranktable as a module.

Usage:
    python -m ranktable
"""

from ranktable.app import main

if __name__ == "__main__":
    main()
