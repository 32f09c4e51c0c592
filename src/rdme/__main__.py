"""Allow ``python -m rdme``."""

from rdme.cli import run

run()
