"""Domain layer — field model, lifecycle phases, validation rules.

This layer depends only on stdlib, pydantic, markupsafe and markdown-it.
It must never import from services, infrastructure, commands, or config.
"""
