import dataclasses

import pytest

from jobtracker.services.statuses import get_default_statuses, get_status_by_id, initial_status, status_id


def test_default_statuses_follow_workflow_order():
    statuses = get_default_statuses()
    assert [status.id for status in statuses] == [
        "not_applied",
        "applied",
        "phone_screen",
        "round_1",
        "round_2",
        "accepted",
        "declined",
    ]
    priorities = [status.priority for status in statuses]
    assert priorities == sorted(priorities)
    assert len(set(priorities)) == len(priorities)


def test_terminal_statuses_have_highest_priorities():
    statuses = get_default_statuses()
    terminal = [status for status in statuses if status.is_terminal]
    non_terminal = [status for status in statuses if not status.is_terminal]
    assert {status.id for status in terminal} == {"accepted", "declined"}
    assert min(status.priority for status in terminal) > max(status.priority for status in non_terminal)


def test_registry_is_immutable_snapshot():
    first = get_default_statuses()
    second = get_default_statuses()
    assert first == second
    assert isinstance(first, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        first[0].name = "Changed"
    assert get_default_statuses()[0].name == "Not Applied"


def test_initial_status_and_lookup():
    assert initial_status().id == "not_applied"
    assert not initial_status().is_terminal
    assert get_status_by_id("round_2").name == "Round 2"
    assert get_status_by_id("offer") is None


def test_status_id_slugifies_display_names():
    assert status_id("Phone Screen") == "phone_screen"
    assert status_id("Round 1") == "round_1"
    assert status_id("  Not Applied ") == "not_applied"
