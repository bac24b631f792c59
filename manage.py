"""Utilidad de línea de comandos para inspeccionar los datos de los laboratorios."""

from __future__ import annotations

import argparse
from typing import Iterable

from labs.config import get_settings
from labs.eventos import NOTIFICACIONES, format_frame
from labs.productos import CatalogoProductos


def cmd_productos_list(_: argparse.Namespace) -> None:
    productos = CatalogoProductos.con_semilla().listar()
    if not productos:
        print("No hay productos en el catálogo inicial.")
        return
    for producto in productos:
        print(f"[{producto.id}] {producto.nombre} · ${producto.precio}")


def cmd_productos_count(_: argparse.Namespace) -> None:
    total = len(CatalogoProductos.con_semilla())
    print(f"Productos en el catálogo inicial: {total}")


def cmd_frames(_: argparse.Namespace) -> None:
    delays = get_settings().notification_delays_ms
    for delay, (event, mensaje) in zip(delays, NOTIFICACIONES):
        print(f"--- t = {delay} ms")
        print(format_frame({"tipo": event, "mensaje": mensaje}, event=event), end="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("productos-list", help="Lista los productos del catálogo inicial").set_defaults(
        func=cmd_productos_list
    )
    subparsers.add_parser("productos-count", help="Indica cuántos productos trae el catálogo inicial").set_defaults(
        func=cmd_productos_count
    )
    subparsers.add_parser("frames", help="Muestra las tramas que envía /notification").set_defaults(func=cmd_frames)
    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
