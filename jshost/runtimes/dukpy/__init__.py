"""JavaScript engine binding using the dukpy distribution.

Provides DukpyIsolate, the BaseIsolate implementation in which every
instance owns a private engine context.
"""

from .isolate import DukpyIsolate

__all__ = ["DukpyIsolate"]
