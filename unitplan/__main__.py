"""
Package entry point.

Allows running the application via:

    python -m unitplan

This simply forwards execution to unitplan.cli.main().
"""

from unitplan.cli import main

if __name__ == "__main__":
    main()
