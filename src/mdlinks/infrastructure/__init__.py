"""Infrastructure layer — markdown parsing, mdast input, filesystem.

This layer depends on stdlib and third-party libs (marko).
It may import domain node types to build trees, but never services,
commands, or output.
"""
