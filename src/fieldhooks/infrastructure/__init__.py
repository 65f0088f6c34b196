"""Infrastructure layer — database, templates, caching, translation.

This layer depends on stdlib and third-party libs (SQLAlchemy, Jinja2).
It may import from domain but never from services, commands, or output.
"""
