"""Configuration for the healthcare portal API.

All runtime settings centralized here - override through environment
variables or a .env file without touching code.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


APP_NAME = os.getenv("APP_NAME", "Healthcare Portal API")
APP_VERSION = "1.0.0"

# Server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "5000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")  # "json" or "console"

# CORS (comma-separated origins, "*" for any)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Seed doctors, insurance options and assistance programs on startup
SEED_SAMPLE_DATA = _env_bool("SEED_SAMPLE_DATA", True)

# bcrypt work factor for password hashing
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
