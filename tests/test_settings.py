from __future__ import annotations

import pytest
from pydantic import ValidationError

from innomatch.config.settings import Settings, get_settings, load_settings


def test_packaged_defaults_match_the_documented_formula():
    settings = get_settings()

    # These values define the public score; changing them changes every ranking.
    assert settings.scoring.weights.tags == 0.5
    assert settings.scoring.weights.type == 0.3
    assert settings.scoring.weights.location == 0.2
    assert (settings.scoring.type_score.same, settings.scoring.type_score.different) == (1.0, 0.5)
    assert (settings.scoring.location_score.same, settings.scoring.location_score.different) == (1.0, 0.3)
    assert settings.scoring.min_score == 0
    assert settings.ranking.top_n == 10


def test_model_defaults_agree_with_packaged_yaml():
    assert Settings().model_dump(exclude={"app"}) == load_settings().model_dump(exclude={"app"})


def test_env_overrides_whitelisted_keys(monkeypatch, tmp_path):
    monkeypatch.setenv("INNOMATCH_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("INNOMATCH_LEDGER_DIR", str(tmp_path / "ledger"))
    monkeypatch.setenv("INNOMATCH_CATALOG_PATH", str(tmp_path / "profiles.json"))

    settings = load_settings()

    assert settings.app.log_level == "DEBUG"
    assert settings.ledger.dir == str(tmp_path / "ledger")
    assert settings.catalog.path == str(tmp_path / "profiles.json")


def test_external_config_file(monkeypatch, tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("ranking:\n  top_n: 5\nledger:\n  backend: memory\n", encoding="utf-8")
    monkeypatch.setenv("INNOMATCH_CONFIG_PATH", str(path))

    settings = load_settings()

    assert settings.ranking.top_n == 5
    assert settings.ledger.backend == "memory"
    # Sections absent from the file keep model defaults.
    assert settings.scoring.weights.tags == 0.5


@pytest.mark.parametrize(
    "payload",
    [
        {"ranking": {"top_n": 11}},
        {"ranking": {"top_n": 0}},
        {"scoring": {"weights": {"tags": 1.5}}},
        {"ledger": {"backend": "redis"}},
        {"app": {"timezone": "Mars/Olympus_Mons"}},
    ],
)
def test_invalid_settings_are_rejected(payload):
    with pytest.raises(ValidationError):
        Settings.model_validate(payload)


def test_non_mapping_yaml_is_rejected(monkeypatch, tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    monkeypatch.setenv("INNOMATCH_CONFIG_PATH", str(path))

    with pytest.raises(ValueError, match="expected a mapping"):
        load_settings()
