"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Mapping, deadline parsing, feed reducers and submission building are
      pure and deterministic (today is injected, never read implicitly in tests)

Design Decisions:
    - Functional core separated from imperative shell: services sequence IO
      around these functions
"""
