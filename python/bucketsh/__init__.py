"""
bucketsh package.

An interactive and scriptable shell for browsing and editing a hierarchical
bucket/key-value database file.  Use ``python -m bucketsh <file>`` or the
``bucketsh`` console script to launch it.
"""

from __future__ import annotations

from .cli import main

__all__ = ["main"]
__version__ = "0.1.0"
