import json

import pytest

from club_comparator.club_state import adjust_cards, record_goal
from club_comparator.domain.models import Goal
from club_comparator.errors import DataError
from club_comparator.storage import ClubStore, load_seed_roster


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(
        json.dumps([{"name": "Barcelona Atlètic", "group": 2}, {"name": "Zamora", "group": 1}]),
        encoding="utf-8",
    )
    return str(path)


def test_seed_roster_ids_follow_position(seed_file):
    clubs = load_seed_roster(seed_file)
    assert [(c.id, c.name, c.group) for c in clubs] == [
        ("club-0", "Barcelona Atlètic", 2),
        ("club-1", "Zamora", 1),
    ]


def test_seed_roster_absent_is_empty(tmp_path):
    assert load_seed_roster(None) == []
    assert load_seed_roster(str(tmp_path / "missing.json")) == []


def test_load_without_snapshot_uses_seed(tmp_path, seed_file):
    store = ClubStore(str(tmp_path / "clubs.json"), seed_path=seed_file)
    assert [c.name for c in store.load()] == ["Barcelona Atlètic", "Zamora"]


def test_save_then_load(tmp_path, seed_file):
    store = ClubStore(str(tmp_path / "nested" / "clubs.json"), seed_path=seed_file)
    clubs = store.load()
    clubs[0] = record_goal(clubs[0], Goal(55, "frontal_area", False), scored=True)
    clubs[1] = adjust_cards(clubs[1], "red", "home", 1)

    store.save(clubs)

    assert ClubStore(store.path).load() == clubs


def test_corrupt_snapshot_falls_back_to_seed(tmp_path, seed_file):
    path = tmp_path / "clubs.json"
    path.write_text("[{broken", encoding="utf-8")
    assert len(ClubStore(str(path), seed_path=seed_file).load()) == 2


def test_reset_removes_snapshot(tmp_path, seed_file):
    store = ClubStore(str(tmp_path / "clubs.json"), seed_path=seed_file)
    store.save([])
    assert (tmp_path / "clubs.json").exists()

    clubs = store.reset()

    assert not (tmp_path / "clubs.json").exists()
    assert len(clubs) == 2
    # resetting twice is fine
    assert len(store.reset()) == 2


def test_save_failure_raises_data_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = ClubStore(str(blocker / "clubs.json"))
    with pytest.raises(DataError) as exc:
        store.save([])
    assert exc.value.code == "WRITE_FAILED"


def test_failed_replace_leaves_no_temp_file(tmp_path, monkeypatch):
    def refuse(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("club_comparator.storage.os.replace", refuse)
    store = ClubStore(str(tmp_path / "clubs.json"))

    with pytest.raises(DataError) as exc:
        store.save([])

    assert exc.value.code == "WRITE_FAILED"
    assert list(tmp_path.iterdir()) == []
