#!/usr/bin/env python3
"""
Wishlist API Runner
===================

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --memory           # In-memory store; token checks still need Firebase credentials
"""

import argparse
import os
import sys

def run_app(host: str, port: int, reload: bool, workers: int):
    """Run the FastAPI application"""
    import uvicorn

    print(f"Starting Wishlist API on {host}:{port}")
    print(f"API Docs: http://{host}:{port}/api/docs")

    uvicorn.run(
        "wishlist_api.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else workers,
        log_level="info"
    )

def main() -> int:
    parser = argparse.ArgumentParser(
        description="Wishlist API Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_app.py                      # Dev server on port 8000
  python run_app.py --mode prod          # Production mode
  python run_app.py --memory --port 8001 # Local store on a custom port
        """
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Worker processes in prod mode (default: 4)"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help=(
            "Use the in-memory document store. Verifying bearer tokens still "
            "needs FIREBASE_CREDENTIALS_PATH, FIREBASE_CREDENTIALS_JSON or "
            "FIREBASE_PROJECT_ID; without them only anonymous calls are answered"
        )
    )

    args = parser.parse_args()

    # Must be set before settings are first imported
    if args.memory:
        os.environ["STORE_BACKEND"] = "memory"

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload, args.workers)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
