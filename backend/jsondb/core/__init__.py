"""
Core utilities - errors, logging and time helpers.
"""
