"""
Infrastructure layer.
Persistence, authentication and web adapters for the task tracker.
"""
