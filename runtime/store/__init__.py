"""
Storage abstractions for rotalog.

Includes:
- LogStore: size-rotated append-only log file bound to one destination
"""

from .log_store import LogStore

__all__ = ["LogStore"]
