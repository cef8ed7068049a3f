"""Module entrypoint for ``python -m lazymd``."""

from .cli import main


if __name__ == "__main__":
    main()
