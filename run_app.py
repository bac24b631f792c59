# Arranca uno de los dos laboratorios con Uvicorn; sirve para lanzarlo con F5 en VS Code.
# Uso: python run_app.py sse | python run_app.py productos

import argparse

import uvicorn  # servidor ASGI que ejecuta las apps FastAPI

from labs.config import get_settings
from labs.logs import configure_logging

APPS = {
    "sse": "labs.main:sse_app",
    "productos": "labs.main:productos_app",
}


def main(argv=None):  # Elige el laboratorio, configura logging y arranca Uvicorn.
    parser = argparse.ArgumentParser(description="Lanza un laboratorio web")
    parser.add_argument("lab", choices=sorted(APPS), help="laboratorio a servir")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    port = settings.sse_port if args.lab == "sse" else settings.productos_port

    uvicorn.run(
        APPS[args.lab],  # ruta "modulo:objeto" de la app
        host=settings.host,
        port=port,
        reload=settings.reload,  # recarga automática al guardar
        log_config=None,  # conserva la configuración de labs.logs
    )


if __name__ == "__main__":
    main()
