"""
Task board: a deadline-aware task tracker.

- taskboard.api: the task store (FastAPI app at taskboard.api.main:app)
- taskboard.client: the polling client core (sync client, poll scheduler,
  classifier, deadline evaluator, board)
"""

__version__ = "0.1.0"
