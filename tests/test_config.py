"""Tests for eletters.config: models and YAML loader."""

import pytest
from pydantic import ValidationError

from eletters.config import DEFAULT_CONFIG_TEMPLATE, ElettersConfig, ProviderSettings
from eletters.config.loader import _expand_env_vars, load_config


# ── Defaults ────────────────────────────────────────────────────────


class TestElettersConfigDefaults:
    def test_logging(self):
        cfg = ElettersConfig()
        assert cfg.log_level == "info"
        assert cfg.log_format == "text"

    def test_providers(self):
        cfg = ElettersConfig()
        assert cfg.llm.primary.provider == "google"
        assert cfg.llm.primary.api_key_env == "GEMINI_API_KEY"
        assert cfg.llm.secondary.provider == "openai"
        assert cfg.llm.secondary.model == "gpt-4.1-mini"

    def test_remote_and_importer(self):
        cfg = ElettersConfig()
        assert cfg.remote.enabled is True
        assert cfg.remote.base_url == "http://127.0.0.1:8000"
        assert cfg.importer.max_file_size_mb == 10
        assert cfg.importer.layout == "single"

    def test_storage_and_server(self):
        cfg = ElettersConfig()
        assert cfg.storage.path == ".eletters/store.json"
        assert cfg.server.port == 8000


class TestValidation:
    def test_rejects_unknown_provider(self):
        with pytest.raises(ValidationError):
            ProviderSettings(provider="anthropic")

    def test_rejects_bad_temperature(self):
        with pytest.raises(ValidationError):
            ProviderSettings(temperature=3)

    def test_rejects_bad_layout(self):
        with pytest.raises(ValidationError):
            ElettersConfig(importer={"layout": "grid"})

    def test_secondary_can_be_disabled(self):
        cfg = ElettersConfig(llm={"secondary": None})
        assert cfg.llm.secondary is None
        assert cfg.llm.primary is not None


# ── Env var expansion ───────────────────────────────────────────────


class TestExpandEnvVars:
    def test_nested(self, monkeypatch):
        monkeypatch.setenv("HOST", "example.test")
        data = {"remote": {"base_url": "http://${HOST}:9000"}, "list": ["${HOST}", 3]}
        assert _expand_env_vars(data) == {
            "remote": {"base_url": "http://example.test:9000"},
            "list": ["example.test", 3],
        }

    def test_missing_var_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("NOPE_NOT_SET", raising=False)
        assert _expand_env_vars("a${NOPE_NOT_SET}b") == "ab"


# ── Loader ──────────────────────────────────────────────────────────


class TestLoadConfig:
    def test_returns_defaults_when_no_file_exists(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        assert load_config() == ElettersConfig()

    def test_loads_project_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("log_level: debug\nimporter:\n  layout: per-question\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        config = load_config()
        assert config.log_level == "debug"
        assert config.importer.layout == "per-question"

    def test_cli_path_takes_priority(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("log_level: debug\n")
        cli_file = tmp_path / "custom.yaml"
        cli_file.write_text("log_level: error\n")
        assert load_config(cli_path=str(cli_file)).log_level == "error"

    def test_user_global_fallback(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        fake_home = tmp_path / "fakehome"
        (fake_home / ".eletters").mkdir(parents=True)
        (fake_home / ".eletters" / "config.yaml").write_text("server:\n  port: 9100\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: fake_home)
        assert load_config().server.port == 9100

    def test_env_vars_expanded(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DRAFT_URL", "http://drafts.internal")
        (tmp_path / "eletters.yaml").write_text('remote:\n  base_url: "${DRAFT_URL}"\n')
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        assert load_config().remote.base_url == "http://drafts.internal"

    def test_invalid_yaml(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("llm: [unclosed\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="Invalid YAML in"):
            load_config()

    def test_invalid_values(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("log_level: loud\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="Invalid config in"):
            load_config()

    def test_non_mapping(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("- a\n- b\n")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        with pytest.raises(ValueError, match="expected a mapping"):
            load_config()

    def test_empty_file_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "eletters.yaml").write_text("")
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        assert load_config() == ElettersConfig()

    def test_default_template_parses(self, tmp_path):
        path = tmp_path / "eletters.yaml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        config = load_config(cli_path=str(path))
        assert config.llm.secondary.provider == "openai"
        assert config.server.host == "127.0.0.1"
