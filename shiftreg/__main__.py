# -*- coding: utf-8 -*-
"""Allow ``python -m shiftreg left right Tright``."""

from shiftreg.cli import run

if __name__ == "__main__":
    run()
