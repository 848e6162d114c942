"""
Core building blocks shared by the rest of the application:
settings, logging, errors and persistence.
"""
