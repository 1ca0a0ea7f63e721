from __future__ import annotations

from pathlib import Path

import pytest

from mcgen.compiler.config import (
    ConfigError,
    GeneratorConfig,
    find_config,
    load_config,
    load_config_from_string,
)


def test_defaults() -> None:
    config = load_config(None)
    assert config == GeneratorConfig(target="python", overwrite=False, emit_codes=False, output="")


def test_generate_table() -> None:
    config = load_config_from_string(
        '[generate]\ntarget = "rust"\noverwrite = true\nemit_codes = true\noutput = "out/codes.rs"\n'
    )
    assert config.target == "rust"
    assert config.overwrite is True
    assert config.emit_codes is True
    assert config.output == "out/codes.rs"


def test_missing_table_uses_defaults() -> None:
    assert load_config_from_string("") == GeneratorConfig()


@pytest.mark.parametrize(
    "text",
    [
        '[generate]\ntarget = "cobol"\n',
        '[generate]\noverwrite = "yes"\n',
        '[generate]\nwat = 1\n',
        'generate = 3\n',
        '[generate\n',
    ],
)
def test_invalid_config(text: str) -> None:
    with pytest.raises(ConfigError):
        load_config_from_string(text)


def test_merged_applies_only_given_overrides() -> None:
    base = GeneratorConfig(target="rust", emit_codes=True)
    merged = base.merged(target=None, overwrite=True, emit_codes=None, output="x.rs")
    assert merged == GeneratorConfig(target="rust", overwrite=True, emit_codes=True, output="x.rs")
    with pytest.raises(ConfigError):
        base.merged(target="cobol")


def test_find_and_load_from_directory(tmp_path: Path) -> None:
    assert find_config(tmp_path) is None
    (tmp_path / "mcgen.toml").write_text('[generate]\nemit_codes = true\n', encoding="utf-8")
    path = find_config(tmp_path)
    assert path == tmp_path / "mcgen.toml"
    assert load_config(path).emit_codes is True


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.toml")
