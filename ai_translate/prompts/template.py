"""
Prompt templates - markdown files with YAML frontmatter

    ---
    name: translator
    variables: [source, target, context_sentence, text]
    ---
    You are a professional {{ source }} ... {{ text }}

Placeholders are filled in a single pass, so catalog strings that happen to
contain `{{ ... }}` reach the model unchanged.
"""

import re
import yaml
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

_FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
_PLACEHOLDER_RE = re.compile(r'\{\{\s*(\w+)\s*\}\}')

PROMPTS_DIR = Path(__file__).parent


@dataclass
class PromptTemplate:
    """A parsed prompt file"""

    body: str
    name: str = ""
    description: str = ""
    variables: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str, name: str = "") -> "PromptTemplate":
        """
        Split frontmatter from body.

        Without frontmatter the declared variables are taken from the
        placeholders found in the body.
        """
        match = _FRONTMATTER_RE.match(text)
        if not match:
            return cls(body=text, name=name, variables=cls._placeholders(text))

        metadata = yaml.safe_load(match.group(1)) or {}
        body = text[match.end():]
        return cls(
            body=body,
            name=metadata.get("name", name),
            description=metadata.get("description", ""),
            variables=list(metadata.get("variables") or cls._placeholders(body)),
            metadata=metadata,
        )

    @staticmethod
    def _placeholders(body: str) -> List[str]:
        seen: List[str] = []
        for match in _PLACEHOLDER_RE.finditer(body):
            if match.group(1) not in seen:
                seen.append(match.group(1))
        return seen

    def render(self, **values: Any) -> str:
        """
        Fill placeholders.

        Raises:
            KeyError: If a declared variable is not supplied
        """
        missing = [v for v in self.variables if v not in values]
        if missing:
            raise KeyError(f"Prompt '{self.name}' is missing variables: {', '.join(missing)}")

        def substitute(match: re.Match) -> str:
            key = match.group(1)
            return str(values[key]) if key in values else match.group(0)

        return _PLACEHOLDER_RE.sub(substitute, self.body)


class PromptTemplateLoader:
    """
    Reads `<name>.md` files from a prompts directory, caching parsed results.

    Usage:
        loader = PromptTemplateLoader()
        prompt = loader.load("translator").render(source="en", target="de", ...)
    """

    def __init__(self, prompts_dir: Optional[str] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else PROMPTS_DIR

    @lru_cache(maxsize=16)
    def load(self, name: str) -> PromptTemplate:
        """
        Raises:
            FileNotFoundError: If `<name>.md` does not exist
        """
        path = self.prompts_dir / f"{name}.md"
        if not path.is_file():
            raise FileNotFoundError(f"Prompt template '{name}' not found in {self.prompts_dir}")
        return PromptTemplate.parse(path.read_text(encoding="utf-8"), name=name)

    def clear_cache(self):
        self.load.cache_clear()


# Singleton instance
_default_loader: Optional[PromptTemplateLoader] = None


def get_template_loader() -> PromptTemplateLoader:
    """Get or create the packaged-prompts loader"""
    global _default_loader
    if _default_loader is None:
        _default_loader = PromptTemplateLoader()
    return _default_loader


def load_prompt(name: str, **values: Any) -> str:
    """Load a packaged prompt and render it"""
    return get_template_loader().load(name).render(**values)
