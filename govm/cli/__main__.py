"""
Entry point for running govm CLI as a module.

Usage: python -m govm.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
