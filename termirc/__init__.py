"""
Terminal IRC client

An interactive client for the line-based IRC protocol: one server
connection, a background reader and a foreground command loop.
"""

__version__ = "1.0.0"
