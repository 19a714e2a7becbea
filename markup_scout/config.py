# === FILE: markup_scout/config.py ===
"""
Loading and validation of MarkupScout run options.
Pydantic describes the schema; YAML or JSON files may supply the values.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

PING_URL = "http://www.google.com/"
DEFAULT_SITE = "http://localhost:3000/"
DEFAULT_USER_AGENT = "MarkupScout/0.1.0"

Mode = Literal["crawl", "static"]


class CrawlOptions(BaseModel):
    """Configuration snapshot for one run. Immutable once built."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: Mode = Field("crawl", description="`crawl` (live HTTP) or `static` (file glob).")
    site: HttpUrl = Field(DEFAULT_SITE, description="Site root URL.")
    pattern: str = Field("**/*.html", min_length=1, description="Glob of local files (static mode).")
    root: Path = Field(default_factory=Path.cwd, description="Local directory mirroring the site root.")
    exclude: Optional[str] = Field(None, description="Regex of URLs never enqueued.")
    ignore: Optional[str] = Field(None, description="Regex of validation errors to drop.")
    markup: bool = Field(True, description="Validate page markup.")
    not_found: bool = Field(False, description="Report broken references.")
    verbose: bool = Field(False, description="Print validation errors of failing pages.")
    color: bool = Field(True, description="Colorize console output.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    cookies: Optional[str] = Field(None, description="Cookie header, e.g. `a=1; b=2`.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    ping_url: Optional[str] = Field(PING_URL, description="Connectivity probe URL; None disables it.")
    schema_dir: Optional[Path] = Field(None, description="Directory of <namespace>.xsd/.dtd files.")

    @field_validator("exclude", "ignore")
    @classmethod
    def _check_regex(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                re.compile(v)
            except re.error as exc:
                raise ValueError(f"invalid regular expression {v!r}: {exc}") from exc
        return v

    @field_validator("ping_url", mode="before")
    @classmethod
    def _empty_ping_disables(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("schema_dir")
    @classmethod
    def _check_schema_dir(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.is_dir():
            raise ValueError(f"schema directory does not exist: {v}")
        return v

    @property
    def site_url(self) -> str:
        return str(self.site)

    @property
    def exclude_re(self) -> Optional[re.Pattern[str]]:
        return re.compile(self.exclude) if self.exclude else None

    @property
    def ignore_re(self) -> Optional[re.Pattern[str]]:
        return re.compile(self.ignore) if self.ignore else None

    def cookie_jar(self) -> Dict[str, str]:
        """Split the `cookies` header string into a name → value mapping."""
        jar: Dict[str, str] = {}
        if not self.cookies:
            return jar
        for part in self.cookies.split(";"):
            name, sep, value = part.strip().partition("=")
            if sep and name:
                jar[name] = value
        return jar


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top-level JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlOptions:
    """
    Read YAML or JSON options, apply *overrides* on top and validate.
    With *path* None only the overrides (and defaults) are used.
    Overrides whose value is None are ignored.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlOptions(**data)


__all__ = ["CrawlOptions", "Mode", "ValidationError", "load_config", "PING_URL"]
