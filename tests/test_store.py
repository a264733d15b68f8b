import pytest
from sqlalchemy.exc import IntegrityError

from database import store
from database.connection import get_db_session
from database.mock_data import CAMPUS_RESOURCES, create_campus_resources
from database.models import Message


def test_create_and_get_user(temp_database):
    created = store.create_user("Maya", "maya@example.edu", major="Biology", interests=["chess"])

    fetched = store.get_user(created["id"])

    assert fetched["name"] == "Maya"
    assert fetched["profile"]["major"] == "Biology"
    assert fetched["profile"]["interests"] == ["chess"]
    assert store.get_user_by_email("maya@example.edu")["id"] == created["id"]
    assert store.get_user(9999) is None


def test_update_profile_only_touches_given_fields(temp_database):
    user = store.create_user("Maya", major="Biology", goals="Graduate early")

    updated = store.update_profile(user["id"], year="Junior", stress_level=5)

    assert updated["profile"]["year"] == "Junior"
    assert updated["profile"]["stress_level"] == "5"
    assert updated["profile"]["major"] == "Biology"
    assert updated["profile"]["goals"] == "Graduate early"
    assert store.update_profile(4242, major="Art") is None


def test_update_stress_level(temp_database):
    user = store.create_user("Maya")

    assert store.update_stress_level(user["id"], 8) is True
    assert store.get_user(user["id"])["profile"]["stress_level"] == "8"
    assert store.update_stress_level(4242, 8) is False


def test_history_is_latest_turns_oldest_first(temp_database):
    user = store.create_user("Maya")
    other = store.create_user("Sam")
    for i in range(6):
        store.save_message(user["id"], "user" if i % 2 == 0 else "assistant", f"turn {i}")
    store.save_message(other["id"], "user", "not mine")

    rows = store.get_conversation_history(user["id"], limit=4)

    assert [row["content"] for row in rows] == ["turn 2", "turn 3", "turn 4", "turn 5"]


def test_assistant_turn_keeps_metadata(temp_database):
    user = store.create_user("Maya")

    message_id = store.save_message(
        user["id"],
        "assistant",
        "Try spaced repetition.",
        intent="academic",
        agent_type="AcademicAgent",
        metadata={"agent_type": "academic"},
    )

    with get_db_session() as db:
        row = db.query(Message).filter_by(id=message_id).one()
        assert row.meta == {"agent_type": "academic"}
    [stored] = store.get_conversation_history(user["id"])
    assert stored["agent_type"] == "AcademicAgent"
    assert stored["metadata"] == {"agent_type": "academic"}


def test_clear_conversation(temp_database):
    user = store.create_user("Maya")
    store.save_message(user["id"], "user", "hello")
    store.save_message(user["id"], "assistant", "hi")

    assert store.clear_conversation(user["id"]) == 2
    assert store.get_conversation_history(user["id"]) == []


def test_advice_logs_newest_first_and_filtered(temp_database):
    user = store.create_user("Maya")
    first = store.save_advice_log(user["id"], "study_plan", "Academic Advice", "a", "AcademicAgent", "medium")
    second = store.save_advice_log(user["id"], "wellness_check", "Wellness Advice", "b", "WellnessAgent", "high")

    all_logs = store.list_advice_logs(user["id"])
    wellness = store.list_advice_logs(user["id"], category="wellness_check")

    assert [log["id"] for log in all_logs] == [second, first]
    assert [log["id"] for log in wellness] == [second]
    assert wellness[0]["priority"] == "high"


def test_campus_resources_seeded(temp_database):
    create_campus_resources()

    resources = store.list_campus_resources()
    clubs = store.list_campus_resources("club")

    assert len(resources) == len(CAMPUS_RESOURCES)
    assert clubs and all(r["category"] == "club" for r in clubs)
    assert [r["name"] for r in resources] == sorted(r["name"] for r in resources)


def test_turns_require_an_existing_user(temp_database):
    with pytest.raises(IntegrityError):
        store.save_message(4242, "user", "orphan")


def test_setup_script_seeds_without_prompt(temp_database, capsys):
    import setup_mock_data

    assert setup_mock_data.main(["--yes"]) == 0

    output = capsys.readouterr().out
    demo = store.get_user_by_email("alex@example.com")
    assert demo is not None
    assert f"--user-id {demo['id']}" in output
    assert len(store.list_campus_resources()) == len(CAMPUS_RESOURCES)
