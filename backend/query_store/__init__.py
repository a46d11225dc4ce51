"""Latest Query Store — a single named text value behind a pluggable storage backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
