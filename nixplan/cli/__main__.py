"""Module wrapper so running ``python -m nixplan.cli`` matches the console script."""

from nixplan.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
