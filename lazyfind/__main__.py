"""Module entrypoint for ``python -m lazyfind``."""

from .cli import main


if __name__ == "__main__":
    main()
