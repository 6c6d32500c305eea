"""Tests for config loading."""

from frigozen.config import CameraConfig, ClaudeConfig, FrigozenConfig, load_config
from frigozen.recipes import DEFAULT_PLACEHOLDER_URL


def test_load_config_defaults(monkeypatch):
    """Loading with no path returns all defaults."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    config = load_config()
    assert isinstance(config, FrigozenConfig)
    assert config.ai.backend == "gemini"
    assert config.ai.gemini.api_key == ""
    assert config.ai.timeout_seconds is None
    assert config.storage.path == "~/.config/frigozen/frigozen.db"
    assert config.inventory.expiring_soon_days == 3
    assert config.inventory.default_shelf_life_days == 7
    assert config.recipes.generate_images is True
    assert config.reminders.enabled is False
    assert config.reminders.schedule == "0 9 * * *"


def test_load_config_nonexistent_file():
    config = load_config("/nonexistent/path.toml")
    assert config.camera.index == 0


def test_load_config_from_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_bytes(
        b"""\
[ai]
backend = "claude"
timeout_seconds = 30

[ai.claude]
api_key = "sk-test"

[storage]
path = "/var/lib/frigozen.db"

[inventory]
expiring_soon_days = 5

[recipes]
generate_images = false

[reminders]
enabled = true
schedule = "0 18 * * *"
"""
    )

    config = load_config(path)

    assert config.ai.backend == "claude"
    assert config.ai.timeout_seconds == 30
    assert config.ai.claude.api_key == "sk-test"
    assert config.storage.path == "/var/lib/frigozen.db"
    assert config.inventory.expiring_soon_days == 5
    assert config.recipes.generate_images is False
    assert config.reminders.enabled is True
    assert config.reminders.schedule == "0 18 * * *"


def test_env_api_keys(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "from-env")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "claude-env")

    config = load_config()

    assert config.ai.gemini.api_key == "from-env"
    assert config.ai.claude.api_key == "claude-env"


def test_file_key_wins_over_env(tmp_path, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    path = tmp_path / "config.toml"
    path.write_text('[ai.gemini]\napi_key = "from-file"\n')

    assert load_config(path).ai.gemini.api_key == "from-file"


def test_partial_sections_keep_dataclass_defaults(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[ai.claude]\napi_key = "k"\n\n[recipes]\ngenerate_images = false\n')

    config = load_config(path)

    assert config.ai.claude.model == ClaudeConfig().model
    assert config.ai.gemini.image_model == "gemini-2.5-flash-image"
    assert config.recipes.placeholder_url == DEFAULT_PLACEHOLDER_URL
    assert config.camera.save_dir == CameraConfig().save_dir
