"""Service layer — extraction runs and the result store.

Services may import from domain, config and infrastructure layers.
They must never import from commands or output.
"""
