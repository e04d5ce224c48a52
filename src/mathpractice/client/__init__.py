"""
mathpractice.client

Terminal front end over the session controller.

Responsibilities:
- Human-readable messages per error kind.
- Render controller snapshots as text and drive the interactive loop.
"""

# Package marker.
