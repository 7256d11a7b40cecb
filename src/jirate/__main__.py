"""Allow ``python -m jirate``."""

from .cli.app import run


if __name__ == "__main__":
    run()
