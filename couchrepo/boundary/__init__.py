"""
Boundary layer for the document database.

Handles all interactions with the store: client transport, persisted
models, and the repository built on top of them.
"""
