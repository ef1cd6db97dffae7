"""
Core Business Logic
==================

Core business logic modules for card loading and rendering.

Modules:
- cards: Card parsing from JSON/YAML into document models
- rendering: Tag tree generation, markdown handling and markup output
"""
