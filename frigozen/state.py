"""Application-wide settings and session, loaded from local storage."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum

from .db import DARK_MODE_KEY, LANGUAGE_KEY, THEME_KEY, USER_KEY, LocalStorage
from .i18n import DEFAULT_LANGUAGE, LANGUAGES
from .models import User

logger = logging.getLogger(__name__)

THEMES: dict[str, str] = {
    "sage": "#82937E",
    "sand": "#C2B280",
    "sky": "#A3B7C9",
    "minimal": "#1e293b",
}
DEFAULT_THEME = "sage"


class View(str, Enum):
    DASHBOARD = "dashboard"
    FRIDGE = "fridge"
    SCAN = "scan"
    RECIPES = "recipes"
    SETTINGS = "settings"


def _load_user(raw: str | None) -> User | None:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Stored user profile is corrupt, logging out")
        return None
    if not isinstance(data, dict) or not isinstance(data.get("email"), str):
        return None
    name = data.get("name")
    return User(name=name if isinstance(name, str) else "", email=data["email"])


@dataclass
class AppState:
    """Current user, language and theme. Setters write through to storage."""

    storage: LocalStorage
    user: User | None = None
    language: str = DEFAULT_LANGUAGE
    dark_mode: bool = False
    theme: str = DEFAULT_THEME
    view: View = field(default=View.DASHBOARD)

    @classmethod
    def load(cls, storage: LocalStorage) -> AppState:
        language = storage.get(LANGUAGE_KEY)
        theme = storage.get(THEME_KEY)
        return cls(
            storage=storage,
            user=_load_user(storage.get(USER_KEY)),
            language=language if language in LANGUAGES else DEFAULT_LANGUAGE,
            dark_mode=storage.get(DARK_MODE_KEY) == "true",
            theme=theme if theme in THEMES else DEFAULT_THEME,
        )

    @property
    def logged_in(self) -> bool:
        return self.user is not None

    @property
    def is_rtl(self) -> bool:
        return self.language == "ar"

    def login(self, email: str, password: str, name: str | None = None) -> User:
        """Sign in. Any non-empty e-mail and password is accepted."""
        email = (email or "").strip()
        if not email or not password:
            raise ValueError("e-mail et mot de passe requis")
        user = User(name=(name or "").strip() or email.split("@")[0], email=email)
        self.user = user
        self.storage.set(USER_KEY, json.dumps(user.to_dict(), ensure_ascii=False))
        return user

    def logout(self) -> None:
        self.user = None
        self.storage.remove(USER_KEY)

    def set_language(self, language: str) -> bool:
        """Switch display language. Returns True if it changed."""
        if language not in LANGUAGES:
            raise ValueError(f"langue inconnue : {language!r} (fr / en / ar)")
        self.storage.set(LANGUAGE_KEY, language)
        changed = language != self.language
        self.language = language
        return changed

    def set_dark_mode(self, enabled: bool) -> None:
        self.dark_mode = bool(enabled)
        self.storage.set(DARK_MODE_KEY, "true" if self.dark_mode else "false")

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(
                f"thème inconnu : {theme!r} ({' / '.join(THEMES)})"
            )
        self.theme = theme
        self.storage.set(THEME_KEY, theme)
