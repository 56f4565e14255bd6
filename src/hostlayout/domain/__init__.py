"""Domain layer — tree model, ids, and host registry boundary.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
