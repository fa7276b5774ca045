"""Infrastructure Layer — database, document store, identity, logging.

Invariants:
    - Every store failure surfaces as TransportError
    - Adapters satisfy the protocols in core/repository_protocols.py

Design Decisions:
    - SQL-backed document store: one JSON column per document, polled snapshots
      plus in-process wakeups for live queries
"""
