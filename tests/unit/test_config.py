import pytest

from member_grid.app.config import Settings, load_settings, validate_settings

ENV_KEYS = [
    "MEMBER_GRID_BASE_URL",
    "MEMBER_GRID_API_TOKEN",
    "MEMBER_GRID_TIMEOUT_SECONDS",
    "MEMBER_GRID_VERIFY_SSL",
    "MEMBER_GRID_RETRY_MAX_ATTEMPTS",
    "MEMBER_GRID_RETRY_BACKOFF_MS",
    "MEMBER_GRID_CONTAINER_KIND",
    "MEMBER_GRID_CONTAINER_ID",
    "MEMBER_GRID_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_defaults() -> None:
    settings = load_settings(".missing-env")

    assert settings.base_url == "http://localhost:8065/api/v4/"
    assert settings.retry_max_attempts == 3
    assert settings.container_kind == "teams"


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("MEMBER_GRID_BASE_URL", "https://chat.example.com/api/v4")
    monkeypatch.setenv("MEMBER_GRID_CONTAINER_KIND", "channels")
    monkeypatch.setenv("MEMBER_GRID_CONTAINER_ID", "chan-1")
    monkeypatch.setenv("MEMBER_GRID_VERIFY_SSL", "false")

    settings = load_settings(".missing-env")
    sdk_config = settings.to_sdk_config()

    assert settings.container_id == "chan-1"
    assert sdk_config.base_url == "https://chat.example.com/api/v4/"
    assert sdk_config.verify_ssl is False


def test_config_from_dotenv(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("MEMBER_GRID_CONTAINER_ID=team-7\nMEMBER_GRID_RETRY_BACKOFF_MS=10\n", encoding="utf-8")

    settings = load_settings(str(env_file))

    assert settings.container_id == "team-7"
    assert settings.retry_backoff_ms == 10


def test_config_validation(monkeypatch) -> None:
    monkeypatch.setenv("MEMBER_GRID_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValueError):
        load_settings(".missing-env")

    with pytest.raises(ValueError):
        validate_settings(Settings(_env_file=None, retry_max_attempts=0))
