import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# The project-root .env is the main development config source and must win over
# stale shell exports, hence override=True.
load_dotenv(override=True)


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"environment variable {key} needs an integer, got {raw!r}") from exc


def _get_env_float(key: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"environment variable {key} needs a number, got {raw!r}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "yes", "y", "on"}


# ===== Paths =====
#
# Sources live under `<repo>/backend/filmfinder/`; runtime artifacts go under
# `<repo>/files/`, never inside the package.

PACKAGE_DIR = Path(__file__).resolve().parents[2]  # backend/filmfinder/
_BACKEND_DIR = PACKAGE_DIR.parent

if _BACKEND_DIR.name == "backend":
    PROJECT_ROOT = _BACKEND_DIR.parent
else:
    # Installed as a regular package: fall back to the working directory.
    PROJECT_ROOT = Path.cwd()

RUNTIME_ROOT = Path(os.getenv("RUNTIME_ROOT", PROJECT_ROOT / "files")).expanduser()
FILMFINDER_STATE_PATH = Path(
    os.getenv("FILMFINDER_STATE_PATH", RUNTIME_ROOT / "filmfinder_state.json")
).expanduser()


# ===== OMDb catalog =====

OMDB_BASE_URL = os.getenv("OMDB_BASE_URL", "https://www.omdbapi.com/").strip()
OMDB_API_KEY = os.getenv("OMDB_API_KEY", "").strip()
# Unset means the HTTP client's own default timeout.
OMDB_TIMEOUT_S = _get_env_float("OMDB_TIMEOUT_S", None)


# ===== Local state =====

RECENT_SEARCHES_KEY = os.getenv("RECENT_SEARCHES_KEY", "recentSearches").strip() or "recentSearches"
RECENT_SEARCHES_LIMIT = _get_env_int("RECENT_SEARCHES_LIMIT", 5) or 5
WATCHLIST_PERSIST = _get_env_bool("WATCHLIST_PERSIST", False)


# ===== Logging =====

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
