from fastapi import APIRouter, Depends, Response

from ..models.preferences_model import Preferences, PreferencesUpdate
from ..services.preferences import load_preferences, save_preferences

router = APIRouter(prefix="/preferences", tags=["Preferences"])


@router.get("/", response_model=Preferences)
async def get_preferences(prefs: Preferences = Depends(load_preferences)):
    return prefs


@router.put("/", response_model=Preferences)
async def update_preferences(
    update: PreferencesUpdate,
    response: Response,
    prefs: Preferences = Depends(load_preferences),
):
    return save_preferences(response, prefs, update)
