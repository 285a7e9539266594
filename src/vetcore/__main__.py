"""Allows running vetcore as a module: python -m vetcore"""

from .cli import app

if __name__ == "__main__":
    app()
