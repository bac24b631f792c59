"""Runs the walkthrough's curl examples against the two running lab servers."""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

from labs.config import get_settings


def pretty(obj: Any) -> str:
    """Return a safe string representation for logging."""
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(obj)


def expect(
    name: str,
    method: str,
    url: str,
    status: int,
    body: Optional[Dict[str, Any]] = None,
    check: Optional[Callable[[Any], bool]] = None,
) -> Any:
    """Send one request, compare the status code and return the decoded payload."""
    print(f"\n=== Test: {name} ===")
    print(f"{method} {url}")
    if body is not None:
        print(f"Cuerpo: {pretty(body)}")

    response = requests.request(method, url, json=body, timeout=10)
    try:
        payload = response.json()
    except ValueError:
        payload = response.text
    print(f"Estado: {response.status_code} (esperado {status})")
    print(pretty(payload))
    if response.status_code != status:
        raise AssertionError(f"{name}: estado {response.status_code}, esperado {status}")
    if check is not None and not check(payload):
        raise AssertionError(f"{name}: respuesta inesperada")
    return payload


def read_frames(url: str, count: int) -> List[str]:
    """Read ``count`` blank-line terminated frames from an SSE stream, then disconnect."""
    frames: List[str] = []
    current: List[str] = []
    with requests.get(url, stream=True, timeout=30) as response:
        response.raise_for_status()
        for line in response.iter_lines(decode_unicode=True):
            if line:
                current.append(line)
                continue
            if current:
                frames.append("\n".join(current))
                current = []
            if len(frames) >= count:
                break
    return frames


def check_productos(base: str) -> None:
    api = f"{base}/api/productos"
    listado = expect("Listar productos", "GET", api, 200, check=lambda p: isinstance(p, list))
    creado = expect(
        "Crear producto",
        "POST",
        api,
        201,
        body={"nombre": "Monitor", "precio": 299},
        check=lambda p: p.get("id") == max([r["id"] for r in listado] or [0]) + 1,
    )
    item = f"{api}/{creado['id']}"
    expect("Obtener producto", "GET", item, 200, check=lambda p: p == creado)
    expect("Actualizar precio", "PUT", item, 200, body={"precio": 279}, check=lambda p: p["precio"] == 279)
    expect("Crear sin precio", "POST", api, 400, body={"nombre": "Incompleto"}, check=lambda p: "error" in p)
    expect("Eliminar producto", "DELETE", item, 200, check=lambda p: p["producto"]["id"] == creado["id"])
    expect("Obtener eliminado", "GET", item, 404, check=lambda p: "error" in p)
    expect("Ruta inexistente", "GET", f"{base}/no-existe", 404, check=lambda p: "error" in p)


def check_sse(base: str) -> None:
    print("\n=== Test: Flujo /events ===")
    frames = read_frames(f"{base}/events", 2)
    for frame in frames:
        print(frame)
    if len(frames) < 2 or not frames[0].startswith(":") or not frames[1].startswith("data: "):
        raise AssertionError("/events: tramas inesperadas")


def build_checks(args: argparse.Namespace) -> Iterable[tuple[str, Callable[[str], None], str]]:
    """Define the list of checks to execute."""
    return (
        ("CRUD de productos", check_productos, args.productos_url),
        ("Server-Sent Events", check_sse, args.sse_url),
    )


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--sse-url", default=f"http://{settings.host}:{settings.sse_port}")
    parser.add_argument("--productos-url", default=f"http://{settings.host}:{settings.productos_port}")
    args = parser.parse_args(argv)

    failures = 0
    for name, run, base in build_checks(args):
        try:
            run(base)
            print(f"\nResultado ({name}): ÉXITO")
        except AssertionError as exc:
            print(f"\nResultado ({name}): ERROR - {exc}")
            failures += 1
        except requests.exceptions.RequestException as exc:
            print(f"\nResultado ({name}): ERROR DE CONEXIÓN - {exc}")
            failures += 1
    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
