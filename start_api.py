#!/usr/bin/env python3
"""
Startup script for the Bristol circuit API server.

This script provides a convenient way to start the API server with
common configuration options and logging setup.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add the current directory to the path
sys.path.insert(0, str(Path(__file__).parent))

from bristol_circuits.api.server import run_server


def main():
    """Main entry point for the API server."""
    parser = argparse.ArgumentParser(
        description="Bristol Circuit API Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start server with default settings
  python start_api.py

  # Start server on specific host and port
  python start_api.py --host 0.0.0.0 --port 8080

  # Start server with auto-reload for development
  python start_api.py --reload --debug

  # Start server with multiple workers
  python start_api.py --workers 4
        """,
    )

    # Server configuration
    parser.add_argument(
        "--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port", type=int, default=8000, help="Server port (default: 8000)"
    )

    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    parser.add_argument(
        "--workers", type=int, default=1, help="Number of worker processes (default: 1)"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Print startup information
    print("Bristol Circuit API Server")
    print("=" * 50)
    print(f"Host: {args.host}")
    print(f"Port: {args.port}")
    print(f"Debug: {args.debug}")
    print(f"Auto-reload: {args.reload}")
    print(f"Workers: {args.workers}")
    print(f"Log Level: {args.log_level}")
    print("=" * 50)

    # Start the server
    try:
        run_server(
            host=args.host,
            port=args.port,
            reload=args.reload,
            debug=args.debug,
            workers=args.workers,
        )
    except KeyboardInterrupt:
        print("\nServer stopped by user")
    except Exception as e:
        print(f"\nServer failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
