#!/usr/bin/env python3
"""
Development server runner for the Congregation Admin API.

Usage:
    python run.py

Or with uvicorn directly:
    uvicorn congregation_api.main:app --reload --host 0.0.0.0 --port 8000
"""
import os
import sys

from dotenv import load_dotenv

# Add the services/api directory to path
sys.path.insert(0, os.path.dirname(__file__))

# Load environment variables
load_dotenv()


def main():
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "0.0.0.0")
    reload = os.environ.get("DEBUG", "false").lower() == "true"

    print(f"Starting server on http://{host}:{port}")
    print(f"  API docs: http://localhost:{port}/docs")
    print(f"  Health check: http://localhost:{port}/api/health")
    print()

    uvicorn.run(
        "congregation_api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.environ.get("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
