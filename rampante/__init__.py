"""
Rampante — installs and drives the /rampante slash command for AI coding CLIs.
"""

__version__ = "0.1.2"
