"""
In-memory collaborators for the decision engine.

Responsibilities:
- Hold submitted ballots per decision, one per voter (re-voting replaces).
- Keep the append-only log of completed decisions per collection.
- Reset a collection's history so its weights return to full.
"""
