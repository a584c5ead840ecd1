"""Allow ``python -m animation_inspector``."""

from .cli import app

if __name__ == "__main__":
    app()
