import os
from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "on"}


def _get_path(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return os.path.expanduser(val.strip())


# --- Snapshot storage ---
STORAGE_ENABLED = _get_bool("STORAGE_ENABLED", True)
DATA_FILE = _get_path("DATA_FILE", os.path.join("data", "clubs.json"))

# Roster used when no snapshot exists yet: JSON array of {"name", "group"}
DEFAULT_SEED_FILE = os.path.join(os.path.dirname(__file__), "data", "roster.json")
SEED_FILE = _get_path("SEED_FILE", DEFAULT_SEED_FILE)

# --- HTTP ---
DEV_SERVER_HOST = os.getenv("DEV_SERVER_HOST", "127.0.0.1")
DEV_SERVER_PORT = int(os.getenv("DEV_SERVER_PORT", "5000"))
