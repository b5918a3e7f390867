"""
Module entry-point that makes the package runnable with

    python -m nixplan

The behaviour is identical to the *nixplan* console script because the Click
group imported below performs all CLI dispatching.
"""

from nixplan.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
