import base64
import json

from fastapi import Request, Response
from loguru import logger
from pydantic import ValidationError

from ..models.preferences_model import Preferences, PreferencesUpdate

COOKIE_NAME = "preferences"
COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # 1 year


def encode_preferences(prefs: Preferences) -> str:
    return base64.urlsafe_b64encode(prefs.model_dump_json().encode()).decode().rstrip("=")


def decode_preferences(raw: str) -> Preferences:
    padded = raw + "=" * (-len(raw) % 4)
    return Preferences.model_validate(json.loads(base64.urlsafe_b64decode(padded.encode())))


def load_preferences(request: Request) -> Preferences:
    """Preferences for this request, read from the cookie with defaults."""
    raw = request.cookies.get(COOKIE_NAME)
    if not raw:
        return Preferences()
    try:
        return decode_preferences(raw)
    except (ValueError, ValidationError) as e:
        logger.info(f"Ignoring unreadable preferences cookie: {e}")
        return Preferences()


def save_preferences(response: Response, current: Preferences, update: PreferencesUpdate) -> Preferences:
    changed = current.model_copy(update=update.model_dump(exclude_none=True))
    response.set_cookie(
        COOKIE_NAME,
        encode_preferences(changed),
        max_age=COOKIE_MAX_AGE,
        samesite="lax",
    )
    return changed
