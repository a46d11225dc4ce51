"""Infrastructure Layer — storage backends, outbound HTTP clients, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every outbound failure is mapped to a QueryStoreError subclass
"""
