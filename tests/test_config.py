"""
Tests for settings and selection rules loading.
"""

from lunch_nutritionist.config import Settings, get_selection_rules, load_yaml_config


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("LLM_MODEL", raising=False)
    monkeypatch.delenv("REDIS_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.llm_model == "deepseek-v3"
    assert settings.llm_temperature == "0.7"
    assert settings.llm_request_timeout_seconds == 300.0
    assert settings.redis_url is None


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "gpt-4o-mini")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")

    settings = Settings(_env_file=None)

    assert settings.llm_model == "gpt-4o-mini"
    assert settings.redis_url == "redis://cache:6379/1"


def test_missing_yaml_is_empty(tmp_path):
    assert load_yaml_config(tmp_path / "nope.yaml") == {}


def test_selection_rules_from_dir(tmp_path):
    (tmp_path / "selection_rules.yaml").write_text("max_selected: 3\nfallback_reasoning: picked\n")

    rules = get_selection_rules(str(tmp_path))

    assert rules == {"max_selected": 3, "fallback_reasoning": "picked"}
