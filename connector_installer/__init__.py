"""CloudGen Access (Fyde) connector installer.

Core design goals:
- One immutable install configuration, resolved up front
- Sequential, logged steps; any failure ends the run with a distinct exit code
- Drop-in environment file regenerated from scratch on every run
"""

__all__ = []
