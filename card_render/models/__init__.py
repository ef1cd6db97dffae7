"""
Data Models
===========

Pydantic data models for card documents.

Models:
- schemas: Card document nodes (elements, inputs, actions) and enums
"""
