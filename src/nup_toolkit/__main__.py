"""Allow ``python -m nup_toolkit``."""

from nup_toolkit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
