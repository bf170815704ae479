"""Allow ``python -m ad_automator.cli``."""

from .app import main

main()
