"""
Core infrastructure: database, security, error handling, logging.
"""
