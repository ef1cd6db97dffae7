"""
Card Processing Module
=====================

Card document loading from JSON and YAML sources.

Components:
- parser: Format detection and conversion into document models
"""
