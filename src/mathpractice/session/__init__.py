"""
mathpractice.session

Client-side session interaction state machine.

Responsibilities:
- Request orchestration with a bounded wait and classified outcomes.
- The session controller, its immutable state snapshots and the skip-confirmation gate.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Front ends (terminal client, tests) talk to `controller.SessionController` only.
