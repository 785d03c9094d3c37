#!/usr/bin/env python3
"""
Chat Relay Server Startup Script

Starts uvicorn with the host and port taken from the application
configuration (PORT defaults to 8000).
"""

import sys

import uvicorn

from chatrelay.config import get_config


def main():
    """Start the chat relay server with uvicorn."""
    server_config = get_config().server
    app_module = "chatrelay.main:app"

    print(f"Starting chat relay server on {server_config.host}:{server_config.port}")

    try:
        config = uvicorn.Config(
            app_module,
            host=server_config.host,
            port=server_config.port,
            log_level="info",
            access_log=True,
            log_config=None,
        )
        server = uvicorn.Server(config)
        server.run()
    except KeyboardInterrupt:
        print("\nServer shutdown requested by user")
        sys.exit(0)
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
