"""
Configuration settings for the Clustering Map client.

The only externally configured value is the analysis service base URL.
Everything else is a fixed default.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in project root (parent of clustering_map/)
_project_root = Path(__file__).parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)

# ===================
# Analysis Service
# ===================

API_URL_ENV = "CLUSTERING_MAP_API_URL"
DEFAULT_API_URL = "https://clustering-map-api.onrender.com"

# Seconds allowed for each phase of a request (connecting, then each read of
# the response), not for the whole exchange. A stall in either phase past this
# limit is reported as a network failure; a slow but steady download is not.
REQUEST_TIMEOUT = 30.0

# ===================
# Project Paths
# ===================

PROJECT_ROOT = _project_root
EXPORT_DIR = Path(os.getenv("CLUSTERING_MAP_EXPORT_DIR") or (PROJECT_ROOT / "exports"))

# ===================
# Upload Limits
# ===================

MAX_UPLOAD_BYTES = 50 * 1024 * 1024  # 50 MiB

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_CONTENT_TYPE = "application/vnd.ms-excel"

ALLOWED_UPLOAD_TYPES = frozenset({XLSX_CONTENT_TYPE, XLS_CONTENT_TYPE})


def resolve_api_url(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the analysis service base URL.

    Uses the CLUSTERING_MAP_API_URL override when it is set to a non-blank
    value, otherwise the fixed default. Never raises: any failure while
    reading the environment falls back to the default.
    """
    try:
        env = os.environ if environ is None else environ
        value = env.get(API_URL_ENV)
        if value and value.strip():
            return value.strip().rstrip("/")
    except Exception:
        pass
    return DEFAULT_API_URL
