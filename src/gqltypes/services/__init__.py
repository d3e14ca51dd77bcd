"""Service layer: schema tooling and the reference executor.

Services may import from the domain layer and config models.
They must never import from commands or output.
"""
