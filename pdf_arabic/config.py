"""Configuration loading for pdf-arabic.

Settings come from a YAML file, then environment overrides. Every field has
a default, so running without any config file is fine.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from pdf_arabic.exceptions import ConfigError
from pdf_arabic.fonts.candidates import DEFAULT_FONT_DIR, FontCandidate, default_candidates
from pdf_arabic.formatting import EGP_LABEL
from pdf_arabic.log import LOG_LEVELS

ENV_CONFIG = "PDF_ARABIC_CONFIG"
ENV_FONT_DIR = "PDF_ARABIC_FONT_DIR"
ENV_FONT_CACHE = "PDF_ARABIC_FONT_CACHE"
ENV_LOG_LEVEL = "PDF_ARABIC_LOG_LEVEL"

USER_CONFIG_PATH = Path("~/.config/pdf-arabic/config.yaml")


@dataclass
class FontSettings:
    dir: Path = DEFAULT_FONT_DIR
    cache_dir: Path | None = None
    timeout: float = 30.0
    max_size: int = 20 * 1024 * 1024
    default_family: str = "helvetica"
    candidates: list[FontCandidate] | None = None

    def resolved_candidates(self) -> tuple[FontCandidate, ...]:
        if self.candidates:
            return tuple(self._anchor(c) for c in self.candidates)
        return default_candidates(self.dir)

    def _anchor(self, candidate: FontCandidate) -> FontCandidate:
        """Resolve a relative local location against the font directory."""
        if candidate.is_remote or candidate.location.startswith("file://"):
            return candidate
        if Path(candidate.location).expanduser().is_absolute():
            return candidate
        return replace(candidate, location=str(self.dir / candidate.location))


@dataclass
class ShapingSettings:
    visual_order: bool = True
    language: str = "ar-EG"


@dataclass
class FormattingSettings:
    currency_label: str = EGP_LABEL


@dataclass
class Config:
    fonts: FontSettings = field(default_factory=FontSettings)
    shaping: ShapingSettings = field(default_factory=ShapingSettings)
    formatting: FormattingSettings = field(default_factory=FormattingSettings)
    log_level: str = "WARNING"
    source: Path | None = None

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from ``path`` or the usual locations.

        Lookup order: ``path``, ``$PDF_ARABIC_CONFIG``, the user config file.
        Environment overrides are applied last.

        Raises:
            ConfigError: If the file is unreadable or holds invalid values.
        """
        config_path = _locate(path)
        data: dict[str, Any] = {}
        if config_path is not None:
            try:
                loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
            except OSError as e:
                raise ConfigError(
                    f"Cannot read config file {config_path}", details={"error": str(e)}
                ) from e
            except yaml.YAMLError as e:
                raise ConfigError(
                    f"Invalid YAML in {config_path}", details={"error": str(e)}
                ) from e
            if loaded is not None and not isinstance(loaded, dict):
                raise ConfigError(f"Config root must be a mapping in {config_path}")
            data = loaded or {}

        config = cls.from_dict(data)
        config.source = config_path
        config.apply_env()
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        fonts = _section(data, "fonts")
        shaping = _section(data, "shaping")
        formatting = _section(data, "formatting")

        font_settings = FontSettings(
            dir=Path(_get(fonts, "dir", str, str(DEFAULT_FONT_DIR))).expanduser(),
            cache_dir=_optional_path(fonts.get("cache_dir")),
            timeout=float(_get(fonts, "timeout", (int, float), 30.0)),
            max_size=_get(fonts, "max_size", int, 20 * 1024 * 1024),
            default_family=_get(fonts, "default_family", str, "helvetica"),
            candidates=_parse_candidates(fonts.get("candidates")),
        )
        if font_settings.timeout <= 0:
            raise ConfigError("fonts.timeout must be positive")
        if font_settings.max_size <= 0:
            raise ConfigError("fonts.max_size must be positive")

        config = cls(
            fonts=font_settings,
            shaping=ShapingSettings(
                visual_order=_get(shaping, "visual_order", bool, True),
                language=_get(shaping, "language", str, "ar-EG"),
            ),
            formatting=FormattingSettings(
                currency_label=_get(formatting, "currency_label", str, EGP_LABEL),
            ),
            log_level=_check_level(_get(data, "log_level", str, "WARNING")),
        )
        return config

    def apply_env(self) -> None:
        if font_dir := os.environ.get(ENV_FONT_DIR):
            self.fonts.dir = Path(font_dir).expanduser()
        if cache_dir := os.environ.get(ENV_FONT_CACHE):
            self.fonts.cache_dir = Path(cache_dir).expanduser()
        if level := os.environ.get(ENV_LOG_LEVEL):
            self.log_level = _check_level(level)


def _locate(path: Path | str | None) -> Path | None:
    if path is not None:
        return Path(path).expanduser()
    if env_path := os.environ.get(ENV_CONFIG):
        return Path(env_path).expanduser()
    user_path = USER_CONFIG_PATH.expanduser()
    if user_path.is_file():
        return user_path
    return None


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def _get(section: dict[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    value = section.get(key)
    if value is None:
        return default
    # bool is an int subclass; keep it out of numeric fields
    if isinstance(value, bool) and kind is not bool:
        raise ConfigError(f"'{key}' has wrong type", details={"value": value})
    if not isinstance(value, kind):
        raise ConfigError(f"'{key}' has wrong type", details={"value": value})
    return value


def _optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError("'cache_dir' must be a path string", details={"value": value})
    return Path(value).expanduser()


def _check_level(level: str) -> str:
    level = level.upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {level}")
    return level


def _parse_candidates(entries: Any) -> list[FontCandidate] | None:
    if entries is None:
        return None
    if not isinstance(entries, list):
        raise ConfigError("'fonts.candidates' must be a list")
    candidates = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"fonts.candidates[{i}] must be a mapping")
        try:
            location = str(entry["location"])
            family = str(entry["family"])
        except KeyError as e:
            raise ConfigError(f"fonts.candidates[{i}] is missing {e.args[0]!r}") from e
        name = entry.get("registration_name") or Path(location).name
        candidates.append(
            FontCandidate(location, str(name), family, str(entry.get("style") or ""))
        )
    return candidates
