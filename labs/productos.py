"""Catálogo en memoria del laboratorio CRUD.

El catálogo es un objeto que la aplicación crea y posee; los handlers lo
reciben a través de ella en lugar de tocar una lista global del módulo.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

Numero = Union[int, float]


@dataclass
class Producto:
    id: int
    nombre: str
    precio: Numero

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ProductoNoEncontrado(LookupError):
    """Se pidió un id que no está en el catálogo."""

    def __init__(self, producto_id: int) -> None:
        super().__init__(f"Producto {producto_id} no encontrado")
        self.producto_id = producto_id


SEMILLA: Tuple[Producto, ...] = (
    Producto(id=1, nombre="Laptop", precio=1200),
    Producto(id=2, nombre="Mouse", precio=25),
    Producto(id=3, nombre="Teclado", precio=75),
)


class CatalogoProductos:
    """Lista mutable de productos con las operaciones del CRUD.

    No hay locks: cada operación se completa dentro de una sola llamada
    síncrona, así que dos handlers del mismo event loop nunca se intercalan a
    mitad de una mutación.
    """

    def __init__(self, productos: Optional[Iterable[Producto]] = None) -> None:
        self._productos: List[Producto] = [replace(p) for p in (productos or [])]

    @classmethod
    def con_semilla(cls) -> "CatalogoProductos":
        return cls(SEMILLA)

    def __len__(self) -> int:
        return len(self._productos)

    def _indice(self, producto_id: int) -> int:
        for idx, producto in enumerate(self._productos):
            if producto.id == producto_id:
                return idx
        raise ProductoNoEncontrado(producto_id)

    def listar(self) -> List[Producto]:
        return [replace(p) for p in self._productos]

    def obtener(self, producto_id: int) -> Producto:
        return replace(self._productos[self._indice(producto_id)])

    def siguiente_id(self) -> int:
        if not self._productos:
            return 1
        return max(p.id for p in self._productos) + 1

    def crear(self, nombre: str, precio: Numero) -> Producto:
        producto = Producto(id=self.siguiente_id(), nombre=nombre, precio=precio)
        self._productos.append(producto)
        return replace(producto)

    def actualizar(
        self,
        producto_id: int,
        nombre: Optional[str] = None,
        precio: Optional[Numero] = None,
    ) -> Producto:
        """Sobrescribe solo los campos recibidos."""
        idx = self._indice(producto_id)
        cambios: Dict[str, Any] = {}
        if nombre is not None:
            cambios["nombre"] = nombre
        if precio is not None:
            cambios["precio"] = precio
        self._productos[idx] = replace(self._productos[idx], **cambios)
        return replace(self._productos[idx])

    def eliminar(self, producto_id: int) -> Producto:
        idx = self._indice(producto_id)
        return self._productos.pop(idx)


__all__ = ["CatalogoProductos", "Producto", "ProductoNoEncontrado", "SEMILLA"]
