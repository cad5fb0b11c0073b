"""Domain layer — issues, parse results, and error types.

This layer depends only on stdlib and pydantic.
It must never import from schemas, output, or config at module level.
"""
