"""Main entry point for `python -m padboard`."""

from padboard.cli.main import cli

if __name__ == "__main__":
    cli()
