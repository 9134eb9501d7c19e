"""Infrastructure layer: cache, persistence, security.

Implements the application ports (IEntryStore, IEntryCache).
"""
