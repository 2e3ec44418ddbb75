"""Service layer: binds workflows to collaborators, returns ServiceResult.

Services may import from runtime, domain and infrastructure layers.
They must never import from commands or output.
"""
