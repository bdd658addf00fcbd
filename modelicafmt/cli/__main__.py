"""
Main entry point for the modelicafmt CLI when run as a module.

This allows the CLI to be executed using:
    python -m modelicafmt.cli

or the equivalent console script entry point.
"""

from . import main

if __name__ == '__main__':
    main()
