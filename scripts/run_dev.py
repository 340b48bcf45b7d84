"""
Development server launcher.

Loads the .env file, then serves the API with uvicorn in reload mode
using the storage backend and log level from the settings.

Usage:
    python scripts/run_dev.py [port]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

import uvicorn

from habit_tracker.core.config import settings

DEFAULT_PORT = 8000


if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PORT

    print("=" * 60)
    print(f"{settings.PROJECT_NAME} {settings.VERSION} - Development Server")
    print("=" * 60)
    print()
    print(f"Storage: {settings.STORAGE_BACKEND}")
    if settings.STORAGE_BACKEND == "memory":
        print("  habits live in the server process and are lost on every reload")
    else:
        print(f"  database: {settings.DATABASE_URL}")
    print(f"Log level: {settings.LOG_LEVEL}")
    print(f"API:  http://localhost:{port}/api/v1/habits")
    print(f"Docs: http://localhost:{port}/docs")
    print()
    print("Press Ctrl+C to stop")
    print("=" * 60)

    uvicorn.run("habit_tracker.main:app", host="0.0.0.0", port=port, reload=True,
                reload_dirs=[str(project_root / "habit_tracker")], log_level=settings.LOG_LEVEL.lower())
