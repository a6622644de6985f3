"""traversim CLI entry point.

This module enables running traversim as:
    python -m traversim <command>
"""

from traversim.cli import main

if __name__ == "__main__":
    main()
