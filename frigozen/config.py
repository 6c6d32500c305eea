"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .recipes import DEFAULT_PLACEHOLDER_URL

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"
    image_model: str = "gemini-2.5-flash-image"


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class AIConfig:
    backend: str = "gemini"
    timeout_seconds: float | None = None
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)


@dataclass
class StorageConfig:
    path: str = "~/.config/frigozen/frigozen.db"


@dataclass
class CameraConfig:
    index: int = 0
    save_dir: str = "/tmp/frigozen"


@dataclass
class InventoryConfig:
    expiring_soon_days: int = 3
    default_shelf_life_days: int = 7


@dataclass
class RecipesConfig:
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL
    generate_images: bool = True


@dataclass
class RemindersConfig:
    enabled: bool = False
    schedule: str = "0 9 * * *"


@dataclass
class FrigozenConfig:
    ai: AIConfig = field(default_factory=AIConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    recipes: RecipesConfig = field(default_factory=RecipesConfig)
    reminders: RemindersConfig = field(default_factory=RemindersConfig)


def load_config(path: str | Path | None = None) -> FrigozenConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    ai = raw.get("ai", {})
    sto = raw.get("storage", {})
    cam = raw.get("camera", {})
    inv = raw.get("inventory", {})
    rec = raw.get("recipes", {})
    rem = raw.get("reminders", {})

    gemini_cfg = ai.get("gemini", {})
    claude_cfg = ai.get("claude", {})

    # Resolve API keys: config file → environment variable
    gemini_api_key = (
        gemini_cfg.get("api_key", "")
        or os.environ.get("GEMINI_API_KEY", "")
        or os.environ.get("API_KEY", "")
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )

    gemini_defaults = GeminiConfig()
    claude_defaults = ClaudeConfig()
    ai_defaults = AIConfig()
    storage_defaults = StorageConfig()
    camera_defaults = CameraConfig()
    inventory_defaults = InventoryConfig()
    recipes_defaults = RecipesConfig()
    reminders_defaults = RemindersConfig()

    return FrigozenConfig(
        ai=AIConfig(
            backend=ai.get("backend", ai_defaults.backend),
            timeout_seconds=ai.get("timeout_seconds", ai_defaults.timeout_seconds),
            gemini=GeminiConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", gemini_defaults.model),
                image_model=gemini_cfg.get("image_model", gemini_defaults.image_model),
            ),
            claude=ClaudeConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", claude_defaults.model),
            ),
        ),
        storage=StorageConfig(
            path=sto.get("path", storage_defaults.path),
        ),
        camera=CameraConfig(
            index=cam.get("index", camera_defaults.index),
            save_dir=cam.get("save_dir", camera_defaults.save_dir),
        ),
        inventory=InventoryConfig(
            expiring_soon_days=inv.get(
                "expiring_soon_days", inventory_defaults.expiring_soon_days
            ),
            default_shelf_life_days=inv.get(
                "default_shelf_life_days", inventory_defaults.default_shelf_life_days
            ),
        ),
        recipes=RecipesConfig(
            placeholder_url=rec.get("placeholder_url", recipes_defaults.placeholder_url),
            generate_images=rec.get("generate_images", recipes_defaults.generate_images),
        ),
        reminders=RemindersConfig(
            enabled=rem.get("enabled", reminders_defaults.enabled),
            schedule=rem.get("schedule", reminders_defaults.schedule),
        ),
    )
