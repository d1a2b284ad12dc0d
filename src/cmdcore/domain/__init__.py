"""Domain layer — argument types, template grammar, conversion rules.

This layer depends only on the standard library.
It must never import from services, commands, output, or config.
"""
