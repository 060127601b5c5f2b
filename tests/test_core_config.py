# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

from rj_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_simple_conversion():
    @dataclass
    class SimpleConfig:
        name: str = "default"
        count: int = 0

    result = _dict_to_dataclass(SimpleConfig, {"name": "test", "count": 42})

    assert isinstance(result, SimpleConfig)
    assert result.name == "test"
    assert result.count == 42


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    result = _dict_to_dataclass(Outer, {"inner": {"value": 99}, "name": "outer"})

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Small:
        valid: str = "default"

    result = _dict_to_dataclass(Small, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_defaults_match_documented_values():
    config = Config()

    assert config.defaults.port == 7777
    assert config.defaults.runtime == "9:0:0"
    assert config.defaults.defaults_file == "~/.run_jupyter.qsub_option_defaults"
    assert config.launch.remote == "grid"
    assert config.poll.run_tries == 40
    assert config.poll.load_tries == 40
    assert config.poll.wait_seconds == 1.5
    assert config.exit_codes.default == 1
    assert config.exit_codes.not_ready == 2


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "rj_config.toml").write_text("")

    monkeypatch.setenv("RJ_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "rj_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "rj").mkdir(parents=True)
    (xdg_config / "rj" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RJ_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "rj").mkdir(parents=True)
    config_file = xdg_config / "rj" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("RJ_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RJ_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "rjd"

[poll]
run_tries = 10
wait_seconds = 0.5

[defaults]
port = 8888
no_parallelism = "mpi 1"

[launch]
remote = "cluster"
""")

    config = Config.load(config_file)

    assert config.binary_name == "rjd"
    assert config.poll.run_tries == 10
    assert config.poll.wait_seconds == 0.5
    assert config.defaults.port == 8888
    assert config.defaults.no_parallelism == "mpi 1"
    assert config.launch.remote == "cluster"

    # non-overriden values
    assert config.poll.load_tries == 40
    assert config.defaults.name == "jupyter"
    assert config.launch.remote_command == "rj submit"


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_invalid_toml_raises(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[poll\nrun_tries = ")

    try:
        Config.load(config_file)
    except ValueError as e:
        assert "Could not read rj config" in str(e)
    else:
        raise AssertionError("ValueError not raised")
