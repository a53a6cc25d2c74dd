
"""
Command-line interface of Slackinvite, run with ``slackinvite --help`` (or
``python -m slackinvite.cli --help``).
"""

__author__ = "slackinvite developers"
