"""Applixy Application Package — scholarship and mentor data-sync service.

Invariants:
    - Package root contains no executable code beyond the version string

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
