"""Linkbook — per-account contact links: add by email, list, view, remove.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
