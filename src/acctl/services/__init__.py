"""Service layer: input acquisition, validation, and account orchestration.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
