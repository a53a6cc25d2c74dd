
"""
Slackinvite is a Python library and Command-Line Interface
to add users to, remove users from, and report on the membership
of channels in a Slack workspace, using the Slack Web API.
"""

__author__ = "slackinvite developers"

from slackinvite.__version__ import __version__, version_info
