"""Renderers that turn a ProductRegistry into human-readable documents."""
