"""Allow running as ``python -m gitat``."""

from gitat.cli import main

if __name__ == "__main__":
    main()
