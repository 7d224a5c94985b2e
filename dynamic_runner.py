#!/usr/bin/env python3

"""Script entrypoint.

Delegates to the rerunner package CLI so the tool can be run straight
from a checkout: ./dynamic_runner.py -s -c -t content changing_script.py
"""

from rerunner.cli import app


if __name__ == "__main__":
    app()
