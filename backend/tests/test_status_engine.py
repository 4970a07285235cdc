from types import SimpleNamespace

from jobtracker.services.status_engine import calculate_current_status, parse_milestone_date


def _status(**dates):
    result = calculate_current_status(dates)
    return result.id, result.name


def test_no_dates_is_not_applied():
    assert _status() == ("not_applied", "Not Applied")
    assert calculate_current_status({}).event_id is None


def test_latest_date_wins():
    assert _status(appliedDate="2025-01-10", phoneScreenDate="2025-01-18") == ("phone_screen", "Phone Screen")
    assert _status(appliedDate="2025-01-10") == ("applied", "Applied")


def test_out_of_order_dates_follow_chronology():
    result = _status(appliedDate="2025-01-15", round1Date="2025-01-20", phoneScreenDate="2025-01-25")
    assert result == ("phone_screen", "Phone Screen")


def test_equal_dates_prefer_later_workflow_step():
    result = _status(appliedDate="2025-01-20", phoneScreenDate="2025-01-20", round1Date="2025-01-20")
    assert result == ("round_1", "Round 1")


def test_invalid_date_is_ignored():
    result = _status(appliedDate="2025-01-15", phoneScreenDate="invalid-date", round1Date="2025-01-25")
    assert result == ("round_1", "Round 1")
    assert _status(round2Date="2025-13-45") == ("not_applied", "Not Applied")


def test_empty_string_same_as_unset():
    assert _status(appliedDate="2025-01-15", phoneScreenDate="") == _status(appliedDate="2025-01-15")
    assert _status(appliedDate="", phoneScreenDate=None) == ("not_applied", "Not Applied")


def test_sparse_assignment():
    assert _status(appliedDate="2025-01-02", round2Date="2025-02-01") == ("round_2", "Round 2")


def test_later_decline_overrides_acceptance():
    assert _status(acceptedDate="2025-01-20", declinedDate="2025-01-25") == ("declined", "Declined")
    assert _status(acceptedDate="2025-01-30", declinedDate="2025-01-25") == ("accepted", "Accepted")


def test_equal_terminal_dates_prefer_declined():
    assert _status(acceptedDate="2025-01-20", declinedDate="2025-01-20") == ("declined", "Declined")


def test_terminal_status_superseded_by_later_interview():
    assert _status(declinedDate="2025-01-10", round2Date="2025-01-12") == ("round_2", "Round 2")


def test_snake_case_keys_and_objects_are_accepted():
    assert _status(round1_date="2025-03-01", applied_date="2025-02-01") == ("round_1", "Round 1")
    record = SimpleNamespace(applied_date="2025-02-01", accepted_date="2025-04-01")
    assert calculate_current_status(record).id == "accepted"


def test_calculation_is_idempotent_and_does_not_mutate_input():
    dates = {"appliedDate": "2025-01-15", "round1Date": "2025-01-20", "declinedDate": "bogus"}
    snapshot = dict(dates)
    assert calculate_current_status(dates) == calculate_current_status(dates)
    assert dates == snapshot


def test_parse_milestone_date_handles_timestamps():
    assert parse_milestone_date("2025-01-15T10:30:00Z") is not None
    assert parse_milestone_date("2025-01-15T10:30:00Z") > parse_milestone_date("2025-01-15")
    assert parse_milestone_date("not-a-date") is None
    assert parse_milestone_date(12345) is None


def test_offsets_beyond_representable_range_are_ignored():
    assert parse_milestone_date("0001-01-01T00:00:00+01:00") is None
    assert parse_milestone_date("9999-12-31T23:00:00-05:00") is None
    result = _status(appliedDate="2025-01-15", round1Date="0001-01-01T00:00:00+01:00")
    assert result == ("applied", "Applied")
    assert _status(declinedDate="9999-12-31T23:00:00-05:00") == ("not_applied", "Not Applied")


def test_only_portable_iso_forms_are_read():
    assert parse_milestone_date("2025-01-20 08:15") is not None
    assert parse_milestone_date("2025-01-20T08:15:30.123+02:00") is not None
    assert parse_milestone_date("20250120") is None
    assert parse_milestone_date("2025-W04-1") is None
    assert parse_milestone_date("2025-01-20T08:15:30.1") is None
    assert parse_milestone_date("2025-01-20\n") is not None
    assert _status(appliedDate="2025-01-15", phoneScreenDate="20250120") == ("applied", "Applied")
