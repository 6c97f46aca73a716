"""Allow ``python -m migrun``."""

from .cli.main import main

main()
