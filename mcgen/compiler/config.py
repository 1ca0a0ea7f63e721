"""Generator settings (mcgen.toml) loading and validation."""
from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from mcgen.backend.emitter import TARGETS

CONFIG_NAME = "mcgen.toml"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    target: str = "python"
    overwrite: bool = False
    emit_codes: bool = False
    output: str = ""

    def validate(self) -> None:
        if self.target not in TARGETS:
            raise ConfigError(
                f"Unknown target '{self.target}'. Must be one of: {', '.join(TARGETS)}."
            )
        for name in ("overwrite", "emit_codes"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be true or false.")
        if not isinstance(self.output, str):
            raise ConfigError("'output' must be a string path.")

    def merged(self, **overrides) -> 'GeneratorConfig':
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **changes)
        config.validate()
        return config


def find_config(directory: Path) -> Optional[Path]:
    candidate = directory / CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load and validate a config file; defaults when `path` is None."""
    if path is None:
        return GeneratorConfig()
    if not path.is_file():
        raise ConfigError(f"No config file at {path}")
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(e)) from None
    return _parse_config(data)


def load_config_from_string(text: str) -> GeneratorConfig:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(e)) from None
    return _parse_config(data)


def _parse_config(data: dict) -> GeneratorConfig:
    gen = data.get("generate", {})
    if not isinstance(gen, dict):
        raise ConfigError("[generate] must be a table.")
    unknown = set(gen) - {"target", "overwrite", "emit_codes", "output"}
    if unknown:
        raise ConfigError(f"Unknown key(s) in [generate]: {', '.join(sorted(unknown))}")
    defaults = GeneratorConfig()
    config = GeneratorConfig(
        target=gen.get("target", defaults.target),
        overwrite=gen.get("overwrite", defaults.overwrite),
        emit_codes=gen.get("emit_codes", defaults.emit_codes),
        output=gen.get("output", defaults.output),
    )
    config.validate()
    return config
