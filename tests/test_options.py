import logging
from pathlib import Path

import pytest

from supermarkdown.config import AppConfig, dump_config, load_config
from supermarkdown.options import HeadingStyle, LinkStyle, Options
from supermarkdown.settings import get_settings


def test_defaults() -> None:
    options = Options()
    assert options.heading_style is HeadingStyle.ATX
    assert options.link_style is LinkStyle.INLINE
    assert options.code_fence == "`"
    assert options.bullet_marker == "-"
    assert options.base_url is None
    assert options.exclude_selectors == ()


def test_values_are_normalised() -> None:
    options = Options(
        heading_style="SETEXT",
        link_style="reference",
        code_fence="~~~",
        bullet_marker="",
        base_url="",
        exclude_selectors=["nav", ".ads"],
        include_selectors=".keep",
    )
    assert options.heading_style is HeadingStyle.SETEXT
    assert options.link_style is LinkStyle.REFERENCED
    assert options.code_fence == "~"
    assert options.bullet_marker == "-"
    assert options.base_url is None
    assert options.exclude_selectors == ("nav", ".ads")
    assert options.include_selectors == (".keep",)


def test_unknown_enum_values_fall_back_to_default() -> None:
    assert Options(heading_style="fancy").heading_style is HeadingStyle.ATX
    assert Options(link_style=None).link_style is LinkStyle.INLINE


def test_options_are_frozen_and_replace_returns_copy() -> None:
    options = Options()
    with pytest.raises(AttributeError):
        options.bullet_marker = "*"  # type: ignore[misc]
    changed = options.replace(bullet_marker="*")
    assert changed.bullet_marker == "*"
    assert options.bullet_marker == "-"


def test_from_mapping_accepts_camel_case_and_ignores_unknown_keys() -> None:
    base = Options(bullet_marker="+")
    options = Options.from_mapping(
        {"headingStyle": "setext", "baseUrl": "https://example.com/", "colour": "red", "codeFence": None},
        base=base,
    )
    assert options.heading_style is HeadingStyle.SETEXT
    assert options.base_url == "https://example.com/"
    assert options.bullet_marker == "+"
    assert options.code_fence == "`"
    assert Options.from_mapping(None, base=base) is base


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.toml")
    assert config == AppConfig()


def test_load_config_reads_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                "[conversion]",
                'heading_style = "setext"',
                'exclude_selectors = ["nav", "footer"]',
                "[runtime]",
                'log_file = "logs/convert.jsonl"',
                "max_input_mb = 2",
                "[api]",
                "enable_local_api = true",
                "port = 9000",
            ]
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.conversion.heading_style is HeadingStyle.SETEXT
    assert config.conversion.exclude_selectors == ("nav", "footer")
    assert config.runtime.log_path == Path("logs/convert.jsonl")
    assert config.runtime.max_input_bytes == 2 * 1024 * 1024
    assert config.api.enable_local_api is True
    assert config.api.port == 9000
    assert '"heading_style": "setext"' in dump_config(config)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SUPERMARKDOWN_CONFIG_PATH", str(tmp_path / "custom.toml"))
    monkeypatch.setenv("SUPERMARKDOWN_ENABLE_LOCAL_API", "yes")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.config_path == tmp_path / "custom.toml"
    assert settings.enable_local_api is True


def test_unsupported_selector_list_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="supermarkdown.options"):
        options = Options(exclude_selectors=5, include_selectors=["main"])  # type: ignore[arg-type]
    assert options.exclude_selectors == ()
    assert options.include_selectors == ("main",)
    assert "Ignoring unsupported selector list" in caplog.text


def test_mapping_with_unsupported_selector_list() -> None:
    options = Options.from_mapping({"excludeSelectors": 5, "bulletMarker": "+"})
    assert options.exclude_selectors == ()
    assert options.bullet_marker == "+"
