"""
Entry point for running canvas-tui as a module.

Usage:
    python -m canvastui
    python -m canvastui list
    python -m canvastui --help
"""
from .cli import main

if __name__ == "__main__":
    main()
