#!/usr/bin/env python3
"""
QuickCart Storefront Runner
===========================

Run the storefront API in development or production mode.

Usage:
    python run_app.py                    # Development mode with auto-reload
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import sys

import uvicorn

from app.core.config import settings

def print_banner():
    """Print application banner"""
    print(f"\n{settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")
    print("=" * 50)

def check_environment():
    """Report which optional backends are configured"""
    if settings.REMOTE_STORE_PROJECT_ID:
        print(f"Record store: {settings.REMOTE_STORE_URL}")
    else:
        print("Record store not configured, catalog reads will be empty")

    if settings.REDIS_URL:
        print(f"Cart storage: {settings.REDIS_URL}")
    else:
        print("Cart storage: in-memory")

def run_app(host: str, port: int, reload: bool):
    """Run the storefront FastAPI application"""
    print(f"\nStarting storefront on {host}:{port}")
    print(f"API Docs: http://{host}:{port}/api/docs\n")

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower()
    )

def main():
    parser = argparse.ArgumentParser(
        description="QuickCart Storefront Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_app.py                      # Development mode on the configured port
  python run_app.py --mode prod          # Production mode
  python run_app.py --port 8001          # Custom port
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
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    print_banner()
    check_environment()

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload)
    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nServer stopped by user")
        sys.exit(0)
