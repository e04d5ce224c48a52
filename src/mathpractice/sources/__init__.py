"""
mathpractice.sources

Collaborator boundary: problem generation, feedback generation and session storage.

Responsibilities:
- Define the interfaces the session controller and the API service call.
- Provide Gemini (httpx) and SQLAlchemy implementations of those interfaces.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Callers depend on `sources.base` protocols, never on httpx or SQLAlchemy directly.
