from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


LOG_LEVEL = os.getenv("PANTRII_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Expiration prioritizer: pantry items due within 0..N days (inclusive) count as expiring.
EXPIRING_WINDOW_DAYS = 3
EXPIRING_ITEM_BOOST = 10

# Expiry classifier: 0 < days <= N is the "warning" band. Tuned separately from the window above.
WARNING_WINDOW_DAYS = 3

LIKED_FLAVOR_POINTS = 10
DISLIKED_FLAVOR_PENALTY = 15

# Days assumed for an unknown expiry date when a status badge is still needed.
UNKNOWN_EXPIRY_FALLBACK_DAYS = 0

DEFAULT_EXPIRY_DAYS = _int_env("PANTRII_DEFAULT_EXPIRY_DAYS", 14)
MAX_PANTRY_ITEMS = _int_env("PANTRII_MAX_PANTRY_ITEMS", 200)

FLAVOR_CONFIDENCE_THRESHOLD = 0.2
FLAVOR_PARTIAL_MATCH_WEIGHT = 0.5
DEFAULT_FLAVOR_SUGGESTIONS = 3


def get_cors_allow_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:8081,http://127.0.0.1:8081").strip()
    if not raw:
        return ["*"]
    return [entry.strip() for entry in raw.split(",") if entry.strip()]
