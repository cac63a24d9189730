#!/usr/bin/env python3
"""
RIP PEDIDOS v1.0 - Launcher
Starts the FastAPI backend with uvicorn.
"""
import os
import sys
from pathlib import Path

import uvicorn

# =============================================================================
# CONFIGURATION
# =============================================================================

BASE_DIR = Path(__file__).parent.resolve()
BACKEND_DIR = BASE_DIR / "backend"

BACKEND_PORT = int(os.getenv("PORT", "8000"))

# Codespaces needs 0.0.0.0 for port forwarding
IS_CODESPACES = os.getenv("CODESPACES") == "true"


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def get_host():
    """Host to bind."""
    return "0.0.0.0" if IS_CODESPACES else "127.0.0.1"


def check_environment():
    """Configuration problems that prevent startup."""
    errors = []
    if not (BACKEND_DIR / "pedidos").exists():
        errors.append(f"Package not found: {BACKEND_DIR / 'pedidos'}")
    if not os.getenv("PG_PASSWORD") and not (BASE_DIR / ".env").exists() and not (BACKEND_DIR / ".env").exists():
        errors.append("No .env file and PG_PASSWORD not set")
        errors.append("  Copy .env.example to .env and fill in the credentials")
    return errors


def print_banner(host):
    print("\n" + "=" * 65)
    print("   RIP PEDIDOS v1.0 - Orders API")
    print("=" * 65)
    print(f"   Backend API:  http://{host}:{BACKEND_PORT}/api")
    print(f"   API Docs:     http://{host}:{BACKEND_PORT}/docs")
    print("=" * 65 + "\n")


# =============================================================================
# MAIN
# =============================================================================

def main():
    errors = check_environment()
    if errors:
        print("\nCONFIGURATION ERRORS:\n")
        for err in errors:
            print(f"   {err}")
        print()
        sys.exit(1)

    host = get_host()
    print_banner(host)

    uvicorn.run(
        "pedidos.main:app",
        host=host,
        port=BACKEND_PORT,
        reload="--reload" in sys.argv,
        app_dir=str(BACKEND_DIR),
    )


if __name__ == "__main__":
    main()
