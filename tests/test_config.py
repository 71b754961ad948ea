import pytest

from mdb2sqlite.config import load_config_file, parse_config, read_config
from mdb2sqlite.errors import ConfigError
from mdb2sqlite.source import DEFAULT_DRIVER


def write(tmp_path, content, name="config.yml"):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_read_full_config(tmp_path):
    path = write(
        tmp_path,
        """
source:
  path: legacy.mdb
  driver: MDBTools
target:
  path: legacy.sqlite
log_level: debug
""",
    )
    config = read_config(path)
    assert config.source == "legacy.mdb"
    assert config.target == "legacy.sqlite"
    assert config.driver == "MDBTools"
    assert config.log_level == "debug"


def test_driver_defaults(tmp_path):
    path = write(tmp_path, "source: {path: a.mdb}\ntarget: {path: a.sqlite}\n")
    config = read_config(path)
    assert config.driver == DEFAULT_DRIVER
    assert config.log_level is None


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config_file(str(tmp_path / "nope.yml"))


def test_empty_file(tmp_path):
    with pytest.raises(ConfigError, match="empty"):
        load_config_file(write(tmp_path, ""))


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config_file(write(tmp_path, "source: [unclosed\n"))


def test_not_a_mapping(tmp_path):
    with pytest.raises(ConfigError, match="mapping"):
        load_config_file(write(tmp_path, "- a\n- b\n"))


@pytest.mark.parametrize(
    "config, missing",
    [
        ({"target": {"path": "a.sqlite"}}, "source.path"),
        ({"source": {"driver": "x"}, "target": {"path": "a.sqlite"}}, "source.path"),
        ({"source": {"path": "a.mdb"}}, "target.path"),
    ],
)
def test_required_keys(config, missing):
    with pytest.raises(ConfigError, match=missing):
        parse_config(config)


@pytest.mark.parametrize(
    "config, section",
    [
        ({"source": "a.mdb", "target": {"path": "a.sqlite"}}, "source"),
        ({"source": {"path": "a.mdb"}, "target": "a.sqlite"}, "target"),
        ({"source": ["a.mdb"], "target": {"path": "a.sqlite"}}, "source"),
    ],
)
def test_sections_must_be_mappings(config, section):
    with pytest.raises(ConfigError, match=f"'{section}' must be a mapping"):
        parse_config(config)
