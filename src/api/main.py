"""
FastAPI entrypoint — Driver Document Verification.

Run with:
    uvicorn src.api.main:app --host 0.0.0.0 --port 8000
"""

from src.api.app import create_app
from src.config.logging_setup import setup_logging
from src.config.settings import get_settings

settings = get_settings()
setup_logging(settings.log_level)

app = create_app()
