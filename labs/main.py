"""Puntos de entrada ASGI de los dos laboratorios.

``uvicorn labs.main:sse_app`` o ``uvicorn labs.main:productos_app``; cada
laboratorio es un servidor independiente.
"""

from .productos_server import create_app as create_productos_app
from .sse_server import create_app as create_sse_app

sse_app = create_sse_app()
productos_app = create_productos_app()

__all__ = ["sse_app", "productos_app"]
