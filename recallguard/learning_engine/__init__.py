"""
Learning engine.

Contains the review scheduling logic:
- SM-2 next-state computation
- Due-question selection
- Memory status aggregation
"""
