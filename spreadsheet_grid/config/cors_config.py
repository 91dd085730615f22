"""
CORS configuration for the development table store.
"""

from typing import Any, Dict, List, Optional

from .settings import Settings, get_settings


def get_cors_config(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Get CORS configuration for FastAPI."""
    settings = settings or get_settings()

    if settings.is_development:
        return {
            "allow_origins": ["*"],
            "allow_credentials": False,
            "allow_methods": ["*"],
            "allow_headers": ["*"],
            "max_age": 86400
        }

    return {
        "allow_origins": validate_cors_origins(settings.CORS_ORIGINS),
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Accept", "Content-Type"],
        "max_age": 3600  # Cache preflight response for 1 hour
    }


def validate_cors_origins(origins: List[str]) -> List[str]:
    """Validate and normalize CORS origins."""
    validated_origins = []

    for origin in origins:
        origin = origin.strip()
        if not origin:
            continue

        if origin == "*":
            validated_origins.append(origin)
            continue

        if not (origin.startswith("http://") or origin.startswith("https://")):
            # Assume http for localhost
            if "localhost" in origin or "127.0.0.1" in origin:
                origin = f"http://{origin}"
            else:
                origin = f"https://{origin}"

        validated_origins.append(origin.rstrip("/"))

    return validated_origins
