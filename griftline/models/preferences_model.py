from typing import Literal

from pydantic import BaseModel


class Preferences(BaseModel):
    theme: Literal["light", "dark", "system"] = "system"
    font: Literal["sans", "serif", "mono"] = "sans"


class PreferencesUpdate(BaseModel):
    theme: Literal["light", "dark", "system"] | None = None
    font: Literal["sans", "serif", "mono"] | None = None
