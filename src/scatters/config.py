from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, FrozenSet, List, Mapping, MutableMapping

import yaml

from .stopwords import STOP_WORDS, load_stopwords


class ConfigError(ValueError):
    """Raised when a configured resource cannot be used."""


@dataclass(slots=True)
class ScattersConfig:
    """Configuration for corpus building and scatter generation."""

    canvas_width: int = 80
    canvas_height: int = 24
    density: float = 1.0
    min_density: float = 0.1
    max_density: float = 6.0
    min_word_length: int = 3
    min_gap: int = 2
    max_attempts: int = 100
    cells_per_word: float = 40.0
    recursive: bool = False
    stopwords_path: str | None = None
    extra_stopwords: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))

    def stop_words(self) -> FrozenSet[str]:
        """Return the built-in stop words plus any configured additions."""
        extra = [word.lower() for word in self.extra_stopwords]
        if self.stopwords_path:
            try:
                extra.extend(load_stopwords(self.stopwords_path))
            except (OSError, UnicodeDecodeError) as exc:
                raise ConfigError(
                    f"Unable to read stopwords_path {self.stopwords_path}: {exc}"
                ) from exc
        if not extra:
            return STOP_WORDS
        return STOP_WORDS | frozenset(extra)


def config_from_dict(data: Mapping[str, Any] | None) -> ScattersConfig:
    """Build a ScattersConfig from a dictionary-like input, ignoring unknown keys."""
    if data is None:
        return ScattersConfig()
    allowed = {f.name for f in fields(ScattersConfig)}
    return ScattersConfig(**{key: data[key] for key in data if key in allowed})


def config_from_yaml(path: str | Path) -> ScattersConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ScattersConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ScattersConfig()
    return config_from_yaml(path)
