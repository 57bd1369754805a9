"""
Runtime configuration for the car rental service.
Values come from the environment (and a local .env file, if present).
"""
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()

BACKEND_DIR = Path(__file__).resolve().parent
DATA_FILE_NAME = "data.json"


def get_env(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def data_path_candidates(cwd: Optional[Path] = None) -> List[Path]:
    """Candidate data file locations, in preference order."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    return [
        base / "data" / DATA_FILE_NAME,
        base / "backend" / "data" / DATA_FILE_NAME,
        base / ".." / "backend" / "data" / DATA_FILE_NAME,
        BACKEND_DIR / "data" / DATA_FILE_NAME,
    ]


def resolve_data_path(explicit: Optional[str] = None, cwd: Optional[Path] = None) -> Path:
    """
    Pick the data file path.
    An explicit path wins, then CAR_RENTAL_DATA_PATH, then the first existing
    candidate. With nothing on disk the first candidate is used.
    """
    configured = explicit or get_env("CAR_RENTAL_DATA_PATH")
    if configured:
        return Path(configured)

    candidates = data_path_candidates(cwd)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]


def app_config() -> dict:
    origins = get_env("CORS_ORIGINS", "*")
    return {
        "log_level": get_env("LOG_LEVEL", "INFO").upper(),
        "host": get_env("HOST", "0.0.0.0"),
        "port": int(get_env("PORT", "8000")),
        "cors_origins": [o.strip() for o in origins.split(",") if o.strip()],
    }
