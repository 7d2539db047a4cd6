"""Main entry point for rbsast package."""

import sys

from rbsast.cli.main import cli


def main():
    """Main function for rbsast."""
    try:
        return cli()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
