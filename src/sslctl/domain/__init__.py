"""Domain layer — catalog keys, catalog indexing, order field mapping.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
