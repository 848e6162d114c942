"""
Pydantic schema definitions for API payloads.

Schemas describe request and response bodies and are kept separate
from the stored documents, which are plain dictionaries.
"""
