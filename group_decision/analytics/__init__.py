"""
Decision analytics.

Responsibilities:
- Record an event for every completed decision.
- Summarise method usage, tie frequency, turnout and most-chosen restaurants.
"""
