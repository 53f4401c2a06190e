"""Main entry point for ``python -m ambiway``."""

from ambiway.cli.main import cli

if __name__ == "__main__":
    cli()
