"""Services Layer — feed controller, directory reads, submission gateway.

Invariants:
    - Services depend on the DocumentStore / IdentityProvider protocols, never
      on a concrete adapter
    - All state transitions are delegated to core/ reducers
"""
