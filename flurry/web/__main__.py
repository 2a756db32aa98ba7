"""Entry point for the JSON harness: python -m flurry.web"""

import argparse

from flurry.log import setup_logging
from flurry.web.server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Flurry — progression engine JSON API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.debug else "INFO", args.log_file)

    print("\n  ❄ Flurry — progression engine")
    print(f"  ➜ http://{args.host}:{args.port}/api/catalog\n")

    run_server(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
