"""Allow ``python -m fogcat``."""

from fogcat.cli import main

main()
