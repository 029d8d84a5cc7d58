# planforge/__main__.py
"""Allow ``python -m planforge``."""

from planforge.cli import app

if __name__ == "__main__":
    app()
