import pytest

from innomatch.catalog.loader import JsonProfileStore
from innomatch.config.settings import get_settings
from innomatch.domain.errors import LedgerUnavailable, ProfileNotFound
from innomatch.ledger.memory import InMemoryPreferenceLedger
from innomatch.recommender.rank import recommend


class _BrokenLedger:
    def __init__(self, exc: Exception):
        self.exc = exc

    def save(self, viewer_id, target_id, disposition):
        raise self.exc

    def query(self, viewer_id):
        raise self.exc

    def history(self, viewer_id):
        raise self.exc


class _CountingStore(JsonProfileStore):
    def __init__(self, path):
        super().__init__(path)
        self.pool_calls = 0

    def get_candidate_pool(self, viewer_id):
        self.pool_calls += 1
        return super().get_candidate_pool(viewer_id)


def test_recommend_end_to_end(catalog_path):
    store = _CountingStore(catalog_path)

    result = recommend("u-001", store=store, ledger=InMemoryPreferenceLedger(), settings=get_settings())

    assert store.pool_calls == 1
    assert result.viewer_id == "u-001"
    assert [m.profile.id for m in result.results] == ["u-002", "u-005", "u-004", "u-003", "u-006"]
    assert [m.score for m in result.results] == [75, 60, 54, 21, 21]
    assert [m.highlight for m in result.results] == [
        "Both startups with shared interests in ai.",
        "Based in riyadh with shared interests in Health.",
        "Faisal shares your passion for Health and AI.",
        "Lina works in Gulf Lab with complementary expertise.",
        "Hassan works in the industry with complementary expertise.",
    ]
    assert result.meta["stats"]["candidates_seen"] == 5
    assert result.meta["top_n"] == 10


def test_recorded_dispositions_reshape_next_ranking(catalog_path):
    store = JsonProfileStore(catalog_path)
    ledger = InMemoryPreferenceLedger()
    ledger.save("u-001", "u-006", "like")
    ledger.save("u-001", "u-002", "like")
    ledger.save("u-001", "u-002", "dislike")

    result = recommend("u-001", store=store, ledger=ledger, settings=get_settings())

    assert [m.profile.id for m in result.results] == ["u-006", "u-005", "u-004", "u-003"]
    assert result.results[0].liked
    assert result.meta["stats"]["disliked_excluded"] == 1
    assert result.meta["dispositions_known"] == 2


def test_viewer_without_tags_gets_empty_result(catalog_path):
    result = recommend("u-003", store=JsonProfileStore(catalog_path), ledger=InMemoryPreferenceLedger())
    assert result.results == []
    assert result.meta["stats"]["empty_viewer_tags"] is True


@pytest.mark.parametrize("exc", [OSError("disk gone"), LedgerUnavailable("u-001", "query", "timeout")])
def test_ledger_failure_is_not_treated_as_neutral(catalog_path, exc):
    with pytest.raises(LedgerUnavailable) as excinfo:
        recommend("u-001", store=JsonProfileStore(catalog_path), ledger=_BrokenLedger(exc), settings=get_settings())
    assert excinfo.value.viewer_id == "u-001"


def test_unknown_viewer(catalog_path):
    with pytest.raises(ProfileNotFound):
        recommend("ghost", store=JsonProfileStore(catalog_path), ledger=InMemoryPreferenceLedger())
