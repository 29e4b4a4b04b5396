"""Allow ``python -m throttler``."""

from throttler.cli import main

if __name__ == "__main__":
    main()
