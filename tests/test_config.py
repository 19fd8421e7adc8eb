from pathlib import Path

import pytest

from nodeify.config import DEFAULT_INPUT, DEFAULT_OUTPUT, NodeifyConfig, load_config
from nodeify.exceptions import ConfigError
from nodeify.passes.rewrite import DEFAULT_ORIGIN


def test_defaults():
    config = NodeifyConfig()
    assert config.input_path == DEFAULT_INPUT == Path("scripts/headless-min.js")
    assert config.output_path == DEFAULT_OUTPUT == Path("src/build.js")
    assert config.origin == DEFAULT_ORIGIN
    assert config.artifacts is None


def test_empty_file_yields_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == NodeifyConfig()


def test_paths_are_coerced(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("output_path: dist/build.js\nartifacts: out/passes\n", encoding="utf-8")

    config = load_config(path)
    assert config.output_path == Path("dist/build.js")
    assert config.artifacts == Path("out/passes")


def test_non_mapping_root_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_yaml_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("origin: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_empty_origin_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("origin: ''\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_merged_ignores_none_values():
    config = NodeifyConfig(origin="https://a.test").merged({"origin": None, "output_path": "x.js"})
    assert config.origin == "https://a.test"
    assert config.output_path == Path("x.js")


@pytest.mark.parametrize(
    "body, message",
    [
        ("input_path: ~\n", "input_path must be a path, not null"),
        ("output_path: 5\n", "output_path must be a path, not int"),
        ("artifacts: [a, b]\n", "artifacts must be a path, not list"),
        ("report_path: ''\n", "report_path must not be empty"),
    ],
)
def test_bad_path_values_are_rejected(tmp_path, body, message):
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError) as excinfo:
        load_config(path)
    assert str(excinfo.value) == message


def test_optional_paths_may_be_null(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("artifacts: ~\nreport_path: ~\n", encoding="utf-8")
    assert load_config(path) == NodeifyConfig()
