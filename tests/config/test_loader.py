import pytest

from romcatalog.config.loader import ConfigError, get_config_value, load_config


@pytest.mark.unit
def test_load_config_applies_defaults(make_config):
    path = make_config({"preview": {"timeout": 5}})

    config = load_config(path)

    assert config["preview"]["timeout"] == 5
    assert config["preview"]["base_url"] == "https://thumbnails.libretro.com"
    assert config["catalog"] == {"max_total": 32768, "max_depth": 5}
    assert config["logging"]["console"] is False
    assert config["logging"]["level"] == "INFO"


@pytest.mark.unit
def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.unit
def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("paths: [unclosed")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(path)


@pytest.mark.unit
def test_non_mapping_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="dictionary"):
        load_config(path)


@pytest.mark.unit
def test_get_config_value_dot_paths():
    config = {"preview": {"timeout": 7}}
    assert get_config_value(config, "preview.timeout") == 7
    assert get_config_value(config, "preview.missing", "fallback") == "fallback"
    assert get_config_value(config, "nope.deeper") is None
