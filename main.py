#!/usr/bin/env python3
"""
Cookie gate - request authentication for a password- or signature-protected web UI.
"""

import argparse
import json
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)

logger = logging.getLogger(__name__)


def check_config() -> int:
    """Print the resolved gate configuration (without the secret). Returns an exit code."""
    from gatekeeper.auth.config import load_gate_config

    cfg = load_gate_config()
    print(
        json.dumps(
            {
                "storageType": cfg.storage_type,
                "authMode": cfg.auth_mode,
                "cookieName": cfg.cookie_name,
                "provisioned": cfg.is_provisioned,
            },
            indent=2,
        )
    )
    if not cfg.is_provisioned:
        logger.error("AUTH_PASSWORD is not set; the gate will redirect every request to /warning")
        return 1
    return 0


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Serve a web UI behind a cookie-based auth gate",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check which auth mode the environment selects
  AUTH_PASSWORD=s3cret python main.py --check-config

  # Run the gated server
  AUTH_PASSWORD=s3cret STORAGE_TYPE=redis python main.py --serve --port 3000
        """,
    )
    parser.add_argument("--serve", action="store_true", help="Run the HTTP server with the auth gate installed")
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Print the resolved auth configuration and exit non-zero if AUTH_PASSWORD is missing",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Server bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Server listen port (default: 8080)")

    args = parser.parse_args()

    try:
        if args.check_config:
            sys.exit(check_config())

        if args.serve:
            from gatekeeper.api.server import run

            run(host=args.host, port=args.port)
            return

        # No arguments provided
        parser.print_help()
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
