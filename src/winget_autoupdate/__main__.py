"""Entry point for ``python -m winget_autoupdate``."""

from winget_autoupdate.cli import run

if __name__ == "__main__":
    run()
