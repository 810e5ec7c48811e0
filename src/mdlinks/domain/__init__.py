"""Domain layer — document tree, link rules, and per-node extraction.

This layer depends only on stdlib, BeautifulSoup and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
