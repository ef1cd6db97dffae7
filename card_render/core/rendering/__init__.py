"""
Rendering Module
===============

Card document to tag tree rendering.

Components:
- tags: Generic tag node and style/attribute builder
- markdown: Markdown fragment conversion for rich text
- text_functions: DATE/TIME macro expansion in card text
- context: Per-pass render context and renderer registries
- layout: Container composition, separators, column sizing, action strips
- renderers: Per node type renderers
- card_renderer: Top-level render orchestration
- html_serializer: Tag tree to HTML markup
"""
