from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .options import Options

CONFIG_FILE = Path("config.toml")


@dataclass(slots=True)
class RuntimeConfig:
    log_file: str = ""
    max_input_mb: int = 25

    @property
    def max_input_bytes(self) -> int:
        return self.max_input_mb * 1024 * 1024

    @property
    def log_path(self) -> Path | None:
        return Path(self.log_file) if self.log_file else None


@dataclass(slots=True)
class APIConfig:
    enable_local_api: bool = False
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    conversion: Options = field(default_factory=Options)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    api: APIConfig = field(default_factory=APIConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name)
    return value if isinstance(value, Mapping) else None


def _build_conversion(data: Mapping[str, object] | None) -> Options:
    return Options.from_mapping(data)


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        log_file=str(data.get("log_file", "")),
        max_input_mb=int(data.get("max_input_mb", 25)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(
        enable_local_api=bool(data.get("enable_local_api", False)),
        host=str(data.get("host", "127.0.0.1")),
        port=int(data.get("port", 8000)),
    )


def load_config(path: Path | None = None) -> AppConfig:
    path = path or CONFIG_FILE
    raw = _read_toml(path)
    return AppConfig(
        conversion=_build_conversion(_section(raw, "conversion")),
        runtime=_build_runtime(_section(raw, "runtime")),
        api=_build_api(_section(raw, "api")),
    )


def dump_config(config: AppConfig) -> str:
    payload = {
        "conversion": config.conversion.as_dict(),
        "runtime": {
            "log_file": config.runtime.log_file,
            "max_input_mb": config.runtime.max_input_mb,
        },
        "api": {
            "enable_local_api": config.api.enable_local_api,
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = ["APIConfig", "AppConfig", "RuntimeConfig", "dump_config", "load_config"]
