"""
mathpractice.services

Service-layer package.

Responsibilities:
- Implement the generate/submit operations exposed over HTTP on top of the
  collaborator interfaces.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are pure Python and testable with fake sources and stores.
