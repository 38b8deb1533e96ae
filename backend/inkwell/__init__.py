"""
Inkwell Backend: Application Package
=======================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │    Routes + auth dependency (API)   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Validation → Services (business)   │  ← ownership, uniqueness, tokens
    ├─────────────────────────────────────┤
    │    Repositories (Store protocol)    │  ← create / find / update
    ├─────────────────────────────────────┤
    │  Models + Database (SQLAlchemy)     │  ← async sessions, one per request
    └─────────────────────────────────────┘

Services only talk to the Store interface, so they can be exercised against
an in-memory store without a database.
"""

__version__ = "1.0.0"
