"""
Entry point for running Tehthu as a module.

Usage:
    python -m tehthu --help
    python -m tehthu translate "Hello world" --dict english-spanish.teh
    python -m tehthu shell
    python -m tehthu info
"""
from .cli import app


if __name__ == "__main__":
    app()
