"""Command line entry point: serve the registry API with uvicorn."""

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from endpoint_registry.config import get_settings
from endpoint_registry.infrastructure.observability import setup_logging
from endpoint_registry.main import create_app

logger = logging.getLogger("endpoint_registry")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="endpoint-registry",
        description="Serve endpoint configuration records stored in Valkey",
    )
    parser.add_argument("--addr", help="listen to address (default: LISTEN_ADDR or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="listen on port (default: LISTEN_PORT or 8000)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        for err in e.errors():
            field = ".".join(str(loc) for loc in err["loc"]).upper()
            logger.error(f"{field}: {err['msg']}")
        return 1

    setup_logging(settings.log_level, settings.log_format)
    addr = args.addr or settings.listen_addr
    port = args.port if args.port is not None else settings.listen_port

    app = create_app(settings)
    logger.info(f"listen to {addr}:{port}")
    uvicorn.run(app, host=addr, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
