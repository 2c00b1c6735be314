from dataclasses import dataclass
from typing import Optional

import pytest

from gingate.envconfig import EnvError, LoadEnvOptions, env_field, load_env


@dataclass
class Settings:
    addr: str = env_field("HTTP_ADDR", default=":8080")
    workers: int = env_field("WORKERS", default=1)
    ratio: float = env_field("RATIO", default=0.5)
    debug: bool = env_field("DEBUG", default=False)
    label: Optional[str] = env_field("LABEL")
    untouched: str = "fixed"


@dataclass
class Strict:
    url: str = env_field("DATABASE_URL", required=True)


NAMES = [
    "APP_HTTP_ADDR",
    "APP_WORKERS",
    "APP_RATIO",
    "APP_DEBUG",
    "APP_LABEL",
    "APP_DATABASE_URL",
    "DATABASE_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults_kept_when_unset():
    settings = Settings()
    load_env(settings, LoadEnvOptions(env_prefix="APP_"))
    assert settings == Settings()


def test_values_converted_with_prefix(monkeypatch):
    monkeypatch.setenv("APP_HTTP_ADDR", ":9090")
    monkeypatch.setenv("APP_WORKERS", "4")
    monkeypatch.setenv("APP_RATIO", "2.25")
    monkeypatch.setenv("APP_DEBUG", "true")
    monkeypatch.setenv("APP_LABEL", "blue")
    settings = Settings()
    load_env(settings, LoadEnvOptions(env_prefix="APP_"))
    assert settings.addr == ":9090"
    assert settings.workers == 4
    assert settings.ratio == 2.25
    assert settings.debug is True
    assert settings.label == "blue"
    assert settings.untouched == "fixed"


def test_unprefixed_variable_ignored_when_prefix_set(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    with pytest.raises(EnvError, match="APP_DATABASE_URL"):
        load_env(Strict(url=""), LoadEnvOptions(env_prefix="APP_"))


def test_required_present(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    strict = Strict(url="")
    load_env(strict)
    assert strict.url == "sqlite://"


@pytest.mark.parametrize("value", ["0", "f", "FALSE", "false", "False"])
def test_false_words(monkeypatch, value):
    monkeypatch.setenv("APP_DEBUG", value)
    settings = Settings(debug=True)
    load_env(settings, LoadEnvOptions(env_prefix="APP_"))
    assert settings.debug is False


@pytest.mark.parametrize(
    "name, value",
    [("APP_WORKERS", "many"), ("APP_RATIO", "x"), ("APP_DEBUG", "yes")],
)
def test_bad_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(EnvError, match="failed to parse env"):
        load_env(Settings(), LoadEnvOptions(env_prefix="APP_"))


def test_non_dataclass_rejected():
    with pytest.raises(EnvError, match="failed to parse env"):
        load_env(object())


def test_missing_dotenv_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(EnvError, match="failed to load env"):
        load_env(Settings(), LoadEnvOptions(dotenv=True))


def test_dotenv_file_loaded(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("APP_WORKERS=7\nAPP_LABEL=green\n")
    settings = Settings()
    load_env(settings, LoadEnvOptions(dotenv=True, env_prefix="APP_"))
    assert settings.workers == 7
    assert settings.label == "green"


def test_dotenv_does_not_override_existing(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_WORKERS", "3")
    (tmp_path / ".env").write_text("APP_WORKERS=7\n")
    settings = Settings()
    load_env(settings, LoadEnvOptions(dotenv=True, env_prefix="APP_"))
    assert settings.workers == 3