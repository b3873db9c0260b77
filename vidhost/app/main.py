"""ASGI entry point: `uvicorn vidhost.app.main:app`.

Loads environment variables and must thus be the only module that builds
the app from the process environment.
"""

from .env_loader import load_environment
from .app import create_app
from .config import AppConfig

load_environment()

app = create_app(AppConfig.from_env())
