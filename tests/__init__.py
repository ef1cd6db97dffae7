"""
Test Suite
==========

Test suite matching the card_render/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: End-to-end rendering from card documents to HTML
"""
