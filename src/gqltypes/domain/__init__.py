"""Domain layer: the type model, fields, scalars and schema.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
