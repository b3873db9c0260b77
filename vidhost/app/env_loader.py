"""Load environment variables early for the FastAPI app.

For local dev, loads a .env file based on ENV ("dev", "staging" or "prod").
In staging and prod, env vars are injected by the platform, so no .env file
is loaded.
"""

import os
import sys
from typing import Literal
from dotenv import load_dotenv

EnvironmentName = Literal["dev", "staging", "prod"]

# Required environment variables that must be set for the app to run.
# If any are missing, the app will fail to start with a clear error message.
REQUIRED_ENV_VARS = [
    "DATABASE_URL",
    "IDENTITY_PROVIDER_URL",
]


def validate_required_env_vars() -> None:
    """Validate that all required environment variables are set.

    Raises:
        SystemExit: If any required environment variables are missing.
    """
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        print(
            f"ERROR: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(
            "Please set these variables in your .env file or environment.",
            file=sys.stderr,
        )
        sys.exit(1)


def load_environment() -> EnvironmentName:
    """Load env vars before any app code runs and validate the required ones."""
    env = get_current_environment()
    if env == "dev":
        print("Loading environment variables from .env.dev")
        load_dotenv(".env.dev", verbose=True)
    else:
        print(f"Running in {env} environment (env vars injected by the platform)")
    validate_required_env_vars()
    return env


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev, staging, or prod)."""
    env = os.getenv("ENV", "dev")
    if env in ("dev", "staging", "prod"):
        return env  # type: ignore[return-value]
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")
