"""Service layer — reconciliation, queries, and mutations returning ServiceResult.

Services may import from the domain layer.
They must never import from commands or output.
"""
