"""
Shared fixtures: fake translation services and catalog builders
"""

import asyncio
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from ai_translate.models import StringCatalog
from ai_translate.utils.config import get_config_loader


class FakeTranslationService:
    """
    In-memory TranslationService.

    `responder(prompt, fallback)` returns the translation or raises. Tracks
    every call and the peak number of concurrent calls.
    """

    def __init__(
        self,
        responder: Optional[Callable[[str, str], str]] = None,
        delay: float = 0.0
    ):
        self.responder = responder or (lambda prompt, fallback: f"<{fallback}>")
        self.delay = delay
        self.calls: List[Dict[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def translate(self, user_prompt: str, fallback: str) -> str:
        self.calls.append({"prompt": user_prompt, "fallback": fallback})
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            return self.responder(user_prompt, fallback)
        finally:
            self.in_flight -= 1

    async def aclose(self) -> None:
        self.closed = True


def target_of(prompt: str) -> str:
    """Extract the target language code from a rendered translator prompt"""
    return prompt.split(" translator.", 1)[0].rsplit(" to ", 1)[1].split(" ", 1)[0]


def by_language(translations: Dict[str, str], fail: tuple = ()) -> Callable[[str, str], str]:
    """Responder that answers per target language and raises for `fail`"""

    def respond(prompt: str, fallback: str) -> str:
        lang = target_of(prompt)
        if lang in fail:
            raise RuntimeError(f"backend unavailable for {lang}")
        return translations.get(lang, f"[{lang}] {fallback}")

    return respond


@pytest.fixture
def fake_service_factory():
    return FakeTranslationService


@pytest.fixture
def make_catalog():
    def _make(strings: dict, source_language: str = "en", **extra) -> StringCatalog:
        return StringCatalog.model_validate(
            {"sourceLanguage": source_language, "strings": strings, **extra}
        )

    return _make


@pytest.fixture
def catalog_file(tmp_path: Path):
    """Write a raw catalog dict to disk and return its path"""

    def _write(raw: dict, name: str = "Localizable.xcstrings") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(raw, ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_config_cache():
    get_config_loader().clear_cache()
    yield
    get_config_loader().clear_cache()
