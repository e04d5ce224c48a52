"""
mathpractice.observability

Observability package.

Responsibilities:
- Structured logging configuration shared by the API and the terminal client.
- Request context propagation for consistent log enrichment.
"""

# Package marker.
