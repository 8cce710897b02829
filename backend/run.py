"""Run script with proper environment loading"""
import os
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_DIR))

from dotenv import load_dotenv

load_dotenv(BACKEND_DIR.parent / ".env", override=True)

os.chdir(BACKEND_DIR)

if __name__ == "__main__":
    import uvicorn

    from punchlines.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "punchlines.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.app_env == "development",
    )
