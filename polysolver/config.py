"""
PolySolver - Runtime configuration.

Values come from the environment (optionally seeded from a ``.env`` file).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

_PROJECT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")

DEFAULT_API_URL = "https://polinomios-api.vercel.app"
DEFAULT_DATA_FILE = os.path.join(_PROJECT_DIR, "data", "session.json")
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    data_file: str = DEFAULT_DATA_FILE
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        api_url=os.getenv("POLYSOLVER_API_URL", DEFAULT_API_URL).rstrip("/"),
        data_file=os.getenv("POLYSOLVER_DATA_FILE", DEFAULT_DATA_FILE),
        log_level=os.getenv("POLYSOLVER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
