"""
Runtime package for rotalog.

This package contains:
- Stores (LogStore, a log writer bound to one destination)
"""
