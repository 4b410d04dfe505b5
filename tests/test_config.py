from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bhasha_mitra.config import (
    API_KEY_ENV,
    DOC_TYPE_ENV,
    LOG_LEVEL_ENV,
    MODEL_ENV,
    Settings,
    load_settings,
    save_settings,
)
from bhasha_mitra.llm.provider import DEFAULT_MODEL
from bhasha_mitra.models import DocType


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Register every key so values loaded from .env files are rolled back
    for key in (API_KEY_ENV, MODEL_ENV, DOC_TYPE_ENV, LOG_LEVEL_ENV):
        monkeypatch.setenv(key, "")
    monkeypatch.chdir(tmp_path)


def test_defaults_without_env(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.env")

    assert settings.api_key == ""
    assert not settings.has_credential
    assert settings.model == DEFAULT_MODEL
    assert settings.doc_type is DocType.GENERIC
    assert settings.log_level == "WARNING"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(API_KEY_ENV, "  secret  ")
    monkeypatch.setenv(MODEL_ENV, "gemini-2.5-pro")
    monkeypatch.setenv(DOC_TYPE_ENV, "Official")
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

    settings = load_settings(tmp_path / "missing.env")

    assert settings.api_key == "secret"
    assert settings.has_credential
    assert settings.model == "gemini-2.5-pro"
    assert settings.doc_type is DocType.OFFICIAL
    assert settings.log_level == "DEBUG"


def test_unknown_doc_type_falls_back_to_generic(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(DOC_TYPE_ENV, "poetry")
    assert load_settings(tmp_path / "missing.env").doc_type is DocType.GENERIC


def test_dotenv_file_overrides_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(API_KEY_ENV, "from-env")
    env_file = tmp_path / "custom.env"
    env_file.write_text(f"{API_KEY_ENV}=from-file\n{DOC_TYPE_ENV}=news\n", encoding="utf-8")

    settings = load_settings(env_file)

    assert settings.api_key == "from-file"
    assert settings.doc_type is DocType.NEWS


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    env_file = tmp_path / "nested" / ".env"
    saved = save_settings(
        Settings(api_key="abc123", model="gemini-2.0-flash", doc_type=DocType.ACADEMIC),
        env_file,
    )

    assert saved == env_file
    content = env_file.read_text(encoding="utf-8")
    assert f"{API_KEY_ENV}=abc123" in content
    assert f"{DOC_TYPE_ENV}=academic" in content
    assert LOG_LEVEL_ENV not in content

    settings = load_settings(env_file)
    assert settings.api_key == "abc123"
    assert settings.model == "gemini-2.0-flash"
    assert settings.doc_type is DocType.ACADEMIC


def test_save_keeps_unrelated_keys(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OTHER=1\n", encoding="utf-8")

    save_settings(Settings(api_key="k"), env_file)

    content = env_file.read_text(encoding="utf-8")
    assert "OTHER=1" in content
    assert f"{API_KEY_ENV}=k" in content
