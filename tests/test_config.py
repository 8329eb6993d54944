"""Tests for configuration loading and validation."""

from unittest.mock import patch

import yaml

from media_inspector.config import (
    DEFAULT_CONFIG,
    generate_secret_token,
    load_config,
    normalize_allowed_dirs,
    save_config,
    valid_timeout,
    validate_config,
)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        assert config["ffmpeg"]["binary"] == "ffmpeg"
        assert config["probe"]["allowed_dirs"] == []
        assert config["logging"]["level"] == "INFO"

    def test_merges_nested(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("ffmpeg:\n  timeout: 5\nlogging:\n  level: DEBUG\n")

        config = load_config(path)

        assert config["ffmpeg"]["timeout"] == 5
        assert config["ffmpeg"]["binary"] == "ffmpeg"
        assert config["logging"]["level"] == "DEBUG"
        assert config["server"]["port"] == 8080

    def test_allowed_dirs_bare_string(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("probe:\n  allowed_dirs: /media\n")
        assert load_config(path)["probe"]["allowed_dirs"] == ["/media"]

    def test_allowed_dirs_null(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("probe:\n  allowed_dirs:\n")
        assert load_config(path)["probe"]["allowed_dirs"] == []

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path)["server"]["host"] == "0.0.0.0"

    def test_defaults_not_mutated(self, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        config["server"]["port"] = 1
        config["probe"]["allowed_dirs"].append("/x")
        assert DEFAULT_CONFIG["server"]["port"] == 8080
        assert DEFAULT_CONFIG["probe"]["allowed_dirs"] == []

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("server:\n  port: 9999\n")
        monkeypatch.setenv("MEDIA_INSPECTOR_CONFIG", str(path))
        assert load_config()["server"]["port"] == 9999


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = load_config(path)
        config["secret_token"] = "abc"
        config["_config_path"] = str(path)

        save_config(config, path)

        saved = yaml.safe_load(path.read_text())
        assert saved["secret_token"] == "abc"
        assert "_config_path" not in saved
        assert load_config(path)["secret_token"] == "abc"


class TestValidateConfig:
    @patch("media_inspector.config.shutil.which", return_value="/usr/bin/ffmpeg")
    def test_clean(self, _which, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        config["server"]["host"] = "127.0.0.1"
        config["probe"]["allowed_dirs"] = [str(tmp_path)]
        assert validate_config(config) == []

    @patch("media_inspector.config.shutil.which", return_value=None)
    def test_problems(self, _which, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        config["probe"]["allowed_dirs"] = ["relative/dir", str(tmp_path / "missing")]
        config["logging"]["level"] = "LOUD"

        warnings = validate_config(config)

        assert any("must be absolute" in w for w in warnings)
        assert any("does not exist" in w for w in warnings)
        assert any("ffmpeg binary not found" in w for w in warnings)
        assert any("Unknown log level" in w for w in warnings)
        assert any("secret_token" in w for w in warnings)


def test_generate_secret_token():
    token = generate_secret_token()
    assert len(token) >= 32
    assert token != generate_secret_token()


class TestNormalizeAllowedDirs:
    def test_values(self):
        assert normalize_allowed_dirs(None) == []
        assert normalize_allowed_dirs("") == []
        assert normalize_allowed_dirs("/srv/media") == ["/srv/media"]
        assert normalize_allowed_dirs(["/a", "/b"]) == ["/a", "/b"]

    def test_rejected(self):
        assert normalize_allowed_dirs({"dir": "/a"}) is None
        assert normalize_allowed_dirs(7) is None
        assert normalize_allowed_dirs(["/a", 7]) is None


class TestValidTimeout:
    def test_values(self):
        assert valid_timeout(30) is True
        assert valid_timeout(0.5) is True
        assert valid_timeout(0) is False
        assert valid_timeout("30") is False
        assert valid_timeout(True) is False

    @patch("media_inspector.config.shutil.which", return_value="/usr/bin/ffmpeg")
    def test_bad_timeout_warned(self, _which, tmp_path):
        config = load_config(tmp_path / "config.yaml")
        config["ffmpeg"]["timeout"] = "soon"
        assert any("timeout" in w for w in validate_config(config))
