"""Persisted settings: API key, model and document type.

Settings are read once at startup from the environment (optionally seeded
from a ``.env`` file) and written back to a ``.env`` file only when the user
explicitly saves them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv, set_key

from .llm.provider import DEFAULT_MODEL
from .models.enums import DocType

API_KEY_ENV = "GEMINI_API_KEY"
MODEL_ENV = "BHASHA_MITRA_MODEL"
DOC_TYPE_ENV = "BHASHA_MITRA_DOC_TYPE"
LOG_LEVEL_ENV = "BHASHA_MITRA_LOG_LEVEL"


@dataclass
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    doc_type: DocType = DocType.GENERIC
    log_level: str = "WARNING"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key.strip())


def load_settings(dotenv_path: str | Path | None = None) -> Settings:
    """Build :class:`Settings` from the environment.

    Values in ``dotenv_path`` (or a ``.env`` found from the working directory
    when None) override variables already set in the process environment.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path=Path(dotenv_path), override=True)
    else:
        load_dotenv(override=True)

    return Settings(
        api_key=os.environ.get(API_KEY_ENV, "").strip(),
        model=os.environ.get(MODEL_ENV, "").strip() or DEFAULT_MODEL,
        doc_type=DocType.parse(os.environ.get(DOC_TYPE_ENV)),
        log_level=os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING",
    )


def save_settings(settings: Settings, dotenv_path: str | Path) -> Path:
    """Write the persisted fields of ``settings`` to ``dotenv_path``.

    The file is created if missing; unrelated keys are left untouched.
    """
    path = Path(dotenv_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch(exist_ok=True)
    set_key(str(path), API_KEY_ENV, settings.api_key, quote_mode="never")
    set_key(str(path), MODEL_ENV, settings.model, quote_mode="never")
    set_key(str(path), DOC_TYPE_ENV, settings.doc_type.value, quote_mode="never")
    return path
