"""
Card Render
===========

Server-side renderer that turns declarative Adaptive-Card style documents
into a generic styled tag tree suitable for HTML presentation.

This package provides:
- Document node models and a JSON/YAML card loader
- Host configuration (theme, spacing, fonts, action layout)
- The rendering engine producing tag trees plus warnings
- Markup serialization of rendered trees
"""

__version__ = "1.0.0"
__author__ = "Card Render Team"
