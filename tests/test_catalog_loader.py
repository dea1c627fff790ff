import json

import pytest

from innomatch.catalog.loader import JsonProfileStore, coerce_profile, load_profile_records
from innomatch.domain.errors import MalformedCandidate, ProfileNotFound
from innomatch.domain.models import Profile


def test_store_returns_viewer_and_everyone_else(catalog_path):
    store = JsonProfileStore(catalog_path)

    viewer = store.get_profile("u-001")
    pool = store.get_candidate_pool("u-001")

    assert isinstance(viewer, Profile)
    assert viewer.tags == ["AI", "Health"]
    assert [r["id"] for r in pool] == ["u-002", "u-003", "u-004", "u-005", "u-006"]


def test_unknown_viewer_raises(catalog_path):
    with pytest.raises(ProfileNotFound):
        JsonProfileStore(catalog_path).get_profile("missing")


def test_catalog_accepts_profiles_envelope(tmp_path, profiles_payload):
    path = tmp_path / "wrapped.json"
    path.write_text(json.dumps({"profiles": profiles_payload + ["junk"]}), encoding="utf-8")
    assert len(load_profile_records(path)) == len(profiles_payload)


def test_catalog_rejects_non_list_payload(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('"nope"', encoding="utf-8")
    with pytest.raises(ValueError):
        load_profile_records(path)


def test_coerce_profile_reports_the_offending_field():
    with pytest.raises(MalformedCandidate) as excinfo:
        coerce_profile({"id": "x", "tags": ["ai"]})
    assert excinfo.value.candidate_id == "x"
    assert "type" in excinfo.value.reason

    with pytest.raises(MalformedCandidate):
        coerce_profile({"id": "y", "type": "startup"})


def test_missing_catalog_is_a_value_error(tmp_path):
    with pytest.raises(ValueError, match="could not be read"):
        load_profile_records(tmp_path / "absent.json")
