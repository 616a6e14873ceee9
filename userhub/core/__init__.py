"""
Core module - settings, errors, logging and password hashing.
"""
