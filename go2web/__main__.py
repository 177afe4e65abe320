"""Allow ``python -m go2web``."""

from go2web.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
