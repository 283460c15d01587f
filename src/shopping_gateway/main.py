"""
Entry point for ``shopping-gateway`` (also ``python -m shopping_gateway.main``).

Settings are loaded before uvicorn starts so that a missing config.yaml or
a bad environment override stops the process with exit code 1.
"""

from __future__ import annotations

import sys

import uvicorn

from shopping_gateway.app import create_app
from shopping_gateway.config import ConfigurationError, get_config_path, get_settings


def main() -> int:
    """
    Serve the gateway on the configured host and port.

    Returns:
        Process exit code
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        # JSON logging is set up in the lifespan, which has not run yet
        print(f"FATAL: cannot load {get_config_path()}\n{e}", file=sys.stderr)
        return 1

    uvicorn.run(
        create_app(),
        host=settings.server.host,
        port=settings.server.port,
        # The service writes its own JSON logs; uvicorn only reports warnings
        log_level="warning",
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
