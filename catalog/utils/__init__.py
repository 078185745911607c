"""
Utilities Package

Helper functions used across the application:
- presence.py: Presence/type predicates for raw request values
"""
