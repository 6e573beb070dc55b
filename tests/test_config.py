"""
Tests for configuration loading.
"""
from pathlib import Path

import pytest

from thesaurus_synonyms.config import Config, load_config
from thesaurus_synonyms.exceptions import ConfigError


class TestDefaults:
    def test_defaults(self):
        config = load_config(env={})

        assert config == Config()
        assert config.lang_code == "da_DK"
        assert config.dsn == "synonyms.db"
        assert config.output_path == Path("synonyms.txt")
        assert config.blacklist_path is None
        assert config.encoding is None

    def test_thesaurus_paths_follow_language(self):
        config = load_config(env={}, lang_code="en_US")
        assert config.thesaurus_index == Path("th_en_US.idx")
        assert config.thesaurus_data == Path("th_en_US.dat")

    def test_explicit_thesaurus_paths(self):
        config = load_config(env={}, index_path="a.idx", data_path="b.dat")
        assert config.thesaurus_index == Path("a.idx")
        assert config.thesaurus_data == Path("b.dat")


class TestYamlFile:
    def test_load_from_file(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text(
            """
dsn: sqlite:///synonyms.db
user: solr
password: secret
lang_code: en_US
blacklist_path: black_list.txt
output_path: out/synonyms.txt
encoding: ISO8859-1
"""
        )

        config = load_config(yaml_file, env={})

        assert config.dsn == "sqlite:///synonyms.db"
        assert config.user == "solr"
        assert config.password == "secret"
        assert config.lang_code == "en_US"
        assert config.blacklist_path == Path("black_list.txt")
        assert config.output_path == Path("out/synonyms.txt")
        assert config.encoding == "iso8859-1"

    def test_empty_file(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("")
        assert load_config(yaml_file, env={}) == Config()

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("dsn: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(yaml_file, env={})

    def test_root_must_be_mapping(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("- dsn\n- lang_code\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(yaml_file, env={})

    def test_unknown_key(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("dsn: x.db\nhost: localhost\n")
        with pytest.raises(ConfigError, match="host"):
            load_config(yaml_file, env={})

    def test_non_string_value(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("lang_code: 42\n")
        with pytest.raises(ConfigError, match="lang_code"):
            load_config(yaml_file, env={})

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml", env={})


class TestPriority:
    def test_env_overrides_file(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("lang_code: en_US\ndsn: file.db\n")

        config = load_config(yaml_file, env={"THESAURUS_LANG_CODE": "de_DE"})

        assert config.lang_code == "de_DE"
        assert config.dsn == "file.db"

    def test_overrides_win(self):
        env = {"THESAURUS_DSN": "env.db", "THESAURUS_OUTPUT_PATH": "env.txt"}
        config = load_config(env=env, dsn="cli.db", output_path=None)

        assert config.dsn == "cli.db"
        assert config.output_path == Path("env.txt")

    def test_empty_env_values_are_ignored(self):
        assert load_config(env={"THESAURUS_DSN": ""}).dsn == "synonyms.db"

    def test_unknown_encoding(self):
        with pytest.raises(ConfigError, match="Unknown encoding"):
            load_config(env={}, encoding="no-such-codec")

    @pytest.mark.parametrize("name", ["hex", "base64", "rot13"])
    def test_non_text_encoding(self, name):
        with pytest.raises(ConfigError, match="Unknown encoding"):
            load_config(env={}, encoding=name)


class TestScalarValues:
    def test_null_values_keep_defaults(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("blacklist_path: null\nencoding: ~\noutput_path:\n")

        assert load_config(yaml_file, env={}) == Config()

    def test_numeric_credentials(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("user: 1001\npassword: 1234\n")

        config = load_config(yaml_file, env={})

        assert config.user == "1001"
        assert config.password == "1234"

    def test_numeric_path_is_rejected(self, tmp_path):
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("output_path: 7\n")
        with pytest.raises(ConfigError, match="output_path"):
            load_config(yaml_file, env={})
