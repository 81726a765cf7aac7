"""Allow ``python -m pagesim``."""

from pagesim.repl import run

run()
