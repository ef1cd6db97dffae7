"""
Configuration
=============

Process settings, host configuration and logging for the card renderer.

Components:
- settings: ``CARD_RENDER_*`` environment settings
- host_config: Theme and layout policy read during rendering
- logging: structlog setup shared by all modules
"""
