# === FILE: site_parity/config.py ===
"""
Loading and validation of the SiteParity configuration.
The schema is described with Pydantic; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

LinkSource = Literal["anchor", "image", "button", "data"]


class ParityConfig(BaseModel):
    """Settings for one extraction / comparison run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Timeout for a single page fetch (seconds).")
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; SiteParity/1.0)",
        min_length=1,
        description="User-Agent header sent with every request.",
    )
    parser: Literal["html.parser", "lxml"] = Field(
        "html.parser", description="BeautifulSoup tree builder."
    )
    link_sources: Tuple[LinkSource, ...] = Field(
        ("anchor",), min_length=1, description="Element kinds surfaced as links."
    )
    resolution: Literal["root", "document"] = Field(
        "root",
        description="'root' joins bare relative references to the origin root, "
        "'document' resolves them against the page path.",
    )
    strip_boilerplate: bool = Field(
        True, description="Drop navigation, headers, footers and ads from rendered content."
    )
    include_images: bool = Field(False, description="Append an 'images' section to the content.")
    host: str = Field("127.0.0.1", min_length=1, description="Bind address of the HTTP service.")
    port: int = Field(8080, ge=1, le=65535, description="Port of the HTTP service.")

    @field_validator("link_sources", mode="before")
    def _dedupe_sources(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple)):
            return tuple(dict.fromkeys(v))
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ParityConfig:
    """
    Read YAML or JSON and return a validated ParityConfig.

    With *path* ``None`` the file ``configs/default.yaml`` is used when it
    exists, otherwise the built-in defaults. An explicit path that does not
    exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ParityConfig()
        path_obj = _DEFAULT_CFG
    else:
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

    return ParityConfig(**data)


__all__ = ["LinkSource", "ParityConfig", "load_config"]
