"""
Application layer.
Use cases and DTOs orchestrating the task domain.
"""
