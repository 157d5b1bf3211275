"""
Shared helpers with no database access.
"""
