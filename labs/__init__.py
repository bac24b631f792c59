"""Laboratorios web: emisor SSE y API CRUD de productos."""

__version__ = "0.1.0"
