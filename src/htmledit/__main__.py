#!/usr/bin/env python3
"""Run the htmledit command line with ``python -m htmledit``.

Arguments and exit codes are the same as for the ``htmledit`` script, e.g.::

    python -m htmledit page.html --trim --remove ".ad" -o clean.html
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
