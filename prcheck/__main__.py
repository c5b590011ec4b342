"""Allow ``python -m prcheck``."""

from prcheck.cli.main import main

main()
