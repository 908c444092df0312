"""
Elfscope Module Entry Point
============================

Allows running the CLI via: python -m elfscope
"""

from elfscope.cli import main

if __name__ == "__main__":
    main()
