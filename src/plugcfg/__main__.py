"""Entry point for ``python -m plugcfg``."""

from plugcfg.cli import main

if __name__ == "__main__":
    main()
