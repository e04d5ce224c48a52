"""
mathpractice.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models for problem sessions and submissions, engine/session setup,
  and repositories.
"""

# Package marker.
