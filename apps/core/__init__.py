"""
Core app - Shared abstractions and utilities.

This app provides cross-cutting pieces used by the domain apps:
- Error taxonomy (StorageError)
- API exception handlers (validation, not-found, storage failures)
"""
