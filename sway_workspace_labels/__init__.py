"""Sway Workspace Labels

Event-driven daemon that keeps Sway workspace names in sync with the
applications running on them, e.g. "3 firefox slack".

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
