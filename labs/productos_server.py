"""Laboratorio B: API REST CRUD de productos con una vista HTML renderizada en servidor.

La cadena de rutas termina igual que en el recorrido del laboratorio: las
rutas de ``/api/productos``, la página ``/home``, un 404 genérico para
cualquier otra ruta y un manejador final para los errores no controlados.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, StrictFloat, StrictInt, field_validator
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings
from .logs import get_logger
from .productos import CatalogoProductos, ProductoNoEncontrado

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

NO_ENCONTRADO = "Producto no encontrado"
RUTA_NO_ENCONTRADA = "Ruta no encontrada"
CAMPOS_REQUERIDOS = "Nombre y precio son requeridos"

log = get_logger(__name__)


class ProductoEntrada(BaseModel):
    # Todos opcionales: la presencia se comprueba en el handler para responder 400.
    nombre: Optional[str] = None
    precio: Optional[Union[StrictInt, StrictFloat]] = None

    @field_validator("precio", mode="before")
    @classmethod
    def _precio_valido(cls, value: Any) -> Any:
        # Sin coerción: ni booleanos, ni cadenas numéricas, ni Infinity/NaN.
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("el precio debe ser un número")
        if not math.isfinite(value):
            raise ValueError("el precio debe ser un número finito")
        if value < 0:
            raise ValueError("el precio no puede ser negativo")
        return value


class ProductoSalida(BaseModel):
    id: int
    nombre: str
    precio: Union[int, float]


class EliminacionRespuesta(BaseModel):
    message: str
    producto: ProductoSalida


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Petición inválida"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "El cuerpo no es un JSON válido"
    loc = first.get("loc", ())
    # Los modelos son planos: loc[1] es el campo, lo demás son ramas internas de pydantic.
    campo = loc[1] if len(loc) >= 2 else "cuerpo"
    return f"Campo '{campo}' inválido"


def _is_path_error(exc: RequestValidationError) -> bool:
    return any(error.get("loc", ())[:1] == ("path",) for error in exc.errors())


class ProductosApplication:
    """Compone la app FastAPI del CRUD y posee el catálogo que usan sus handlers."""

    def __init__(
        self,
        catalogo: Optional[CatalogoProductos] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.catalogo = catalogo if catalogo is not None else CatalogoProductos.con_semilla()
        self.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

        self.app = FastAPI(title="Laboratorio CRUD de productos", version=__version__)
        self._configure_error_handlers()
        self._configure_routes()

    # ------------------------------------------------------------------
    # Middleware and error handling
    # ------------------------------------------------------------------

    def _configure_error_handlers(self) -> None:
        app = self.app

        @app.middleware("http")
        async def non_strict_slashes(request: Request, call_next):
            # "/api/productos/" se enruta igual que "/api/productos".
            path = request.scope["path"]
            if len(path) > 1 and path.endswith("/"):
                request.scope["path"] = path.rstrip("/") or "/"
            return await call_next(request)

        @app.exception_handler(StarletteHTTPException)
        async def http_error(request: Request, exc: StarletteHTTPException):
            return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)

        @app.exception_handler(RequestValidationError)
        async def validation_error(request: Request, exc: RequestValidationError):
            # Un id que no es entero no identifica ningún producto.
            if _is_path_error(exc):
                return JSONResponse({"error": NO_ENCONTRADO}, status_code=404)
            return JSONResponse({"error": _describe_validation(exc)}, status_code=400)

        @app.exception_handler(Exception)
        async def unhandled_error(request: Request, exc: Exception):
            log.exception("Error no controlado en %s %s", request.method, request.url.path)
            return JSONResponse({"message": str(exc) or type(exc).__name__, "status": 500}, status_code=500)

    # ------------------------------------------------------------------
    # Route wiring
    # ------------------------------------------------------------------

    def _configure_routes(self) -> None:
        app = self.app
        catalogo = self.catalogo

        @app.get("/health")
        async def health() -> Dict[str, Any]:
            return {"status": "ok", "productos": len(catalogo)}

        # ----------------------------- API -----------------------------

        @app.get("/api/productos", response_model=List[ProductoSalida])
        async def list_productos():
            return [producto.to_dict() for producto in catalogo.listar()]

        @app.get("/api/productos/{producto_id}", response_model=ProductoSalida)
        async def get_producto(producto_id: int):
            try:
                return catalogo.obtener(producto_id).to_dict()
            except ProductoNoEncontrado as exc:
                raise HTTPException(status_code=404, detail=NO_ENCONTRADO) from exc

        @app.post("/api/productos", response_model=ProductoSalida, status_code=201)
        async def create_producto(payload: Optional[ProductoEntrada] = None):
            if payload is None or payload.precio is None or not (payload.nombre or "").strip():
                raise HTTPException(status_code=400, detail=CAMPOS_REQUERIDOS)
            producto = catalogo.crear(payload.nombre.strip(), payload.precio)
            log.info("Producto creado: [%d] %s", producto.id, producto.nombre)
            return producto.to_dict()

        @app.put("/api/productos/{producto_id}", response_model=ProductoSalida)
        async def update_producto(producto_id: int, payload: Optional[ProductoEntrada] = None):
            payload = payload or ProductoEntrada()
            if payload.nombre is not None and not payload.nombre.strip():
                raise HTTPException(status_code=400, detail="El nombre no puede estar vacío")
            nombre = payload.nombre.strip() if payload.nombre is not None else None
            try:
                producto = catalogo.actualizar(producto_id, nombre=nombre, precio=payload.precio)
            except ProductoNoEncontrado as exc:
                raise HTTPException(status_code=404, detail=NO_ENCONTRADO) from exc
            log.info("Producto actualizado: [%d] %s", producto.id, producto.nombre)
            return producto.to_dict()

        @app.delete("/api/productos/{producto_id}", response_model=EliminacionRespuesta)
        async def delete_producto(producto_id: int):
            try:
                producto = catalogo.eliminar(producto_id)
            except ProductoNoEncontrado as exc:
                raise HTTPException(status_code=404, detail=NO_ENCONTRADO) from exc
            log.info("Producto eliminado: [%d] %s", producto.id, producto.nombre)
            return {"message": "Producto eliminado", "producto": producto.to_dict()}

        # ----------------------------- Vistas ---------------------------

        @app.get("/home", response_class=HTMLResponse)
        async def home(request: Request):
            return self.templates.TemplateResponse(
                request,
                "home.html",
                {"titulo": "Lista de productos", "productos": catalogo.listar()},
            )

        # Va la última: cualquier ruta que no haya coincidido antes.
        @app.api_route(
            "/{path:path}",
            methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            include_in_schema=False,
        )
        async def not_found(path: str):
            raise HTTPException(status_code=404, detail=RUTA_NO_ENCONTRADA)


def create_app(
    catalogo: Optional[CatalogoProductos] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Factory for ASGI servers."""
    return ProductosApplication(catalogo, settings).app
