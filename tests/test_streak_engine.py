from datetime import date, datetime, timedelta

from services.streak_service import update_streak

DAY_N = date(2024, 3, 10)


def _state(current, last, longest):
    return {"current_streak": current, "last_entry_date": last, "longest_streak": longest}


def test_first_entry_without_prior_state():
    result = update_streak(None, DAY_N)
    assert result == {
        "current_streak": 1,
        "last_entry_date": DAY_N,
        "longest_streak": 1,
        "already_recorded_today": False,
    }


def test_first_entry_with_zeroed_row():
    result = update_streak(_state(0, None, 0), DAY_N)
    assert result["current_streak"] == 1
    assert result["longest_streak"] == 1


def test_next_day_increments():
    result = update_streak(_state(3, DAY_N, 5), DAY_N + timedelta(days=1))
    assert result["current_streak"] == 4
    assert result["last_entry_date"] == DAY_N + timedelta(days=1)
    assert result["longest_streak"] == 5
    assert result["already_recorded_today"] is False


def test_next_day_raises_longest_when_passed():
    result = update_streak(_state(5, DAY_N, 5), DAY_N + timedelta(days=1))
    assert result["current_streak"] == 6
    assert result["longest_streak"] == 6


def test_same_day_is_unchanged():
    result = update_streak(_state(3, DAY_N, 5), DAY_N)
    assert result == {
        "current_streak": 3,
        "last_entry_date": DAY_N,
        "longest_streak": 5,
        "already_recorded_today": True,
    }


def test_same_day_ignores_time_of_day():
    prior = _state(2, datetime(2024, 3, 10, 23, 59), 2)
    result = update_streak(prior, datetime(2024, 3, 10, 0, 1))
    assert result["already_recorded_today"] is True
    assert result["last_entry_date"] == DAY_N


def test_next_calendar_day_across_midnight():
    prior = _state(2, datetime(2024, 3, 10, 23, 59), 2)
    result = update_streak(prior, datetime(2024, 3, 11, 0, 1))
    assert result["current_streak"] == 3


def test_gap_resets_to_one():
    result = update_streak(_state(3, DAY_N, 3), DAY_N + timedelta(days=5))
    assert result["current_streak"] == 1
    assert result["longest_streak"] == 3
    assert result["last_entry_date"] == DAY_N + timedelta(days=5)


def test_two_day_gap_resets():
    result = update_streak(_state(7, DAY_N, 9), DAY_N + timedelta(days=2))
    assert result["current_streak"] == 1
    assert result["longest_streak"] == 9


def test_backdated_entry_resets():
    result = update_streak(_state(4, DAY_N, 4), DAY_N - timedelta(days=1))
    assert result["current_streak"] == 1
    assert result["longest_streak"] == 4
    assert result["last_entry_date"] == DAY_N - timedelta(days=1)


def test_longest_never_decreases_over_a_sequence():
    offsets = [0, 1, 2, 2, 5, 6, 7, 8, 3, 20, 21]
    state = None
    longest_seen = 0
    for offset in offsets:
        state = update_streak(state, DAY_N + timedelta(days=offset))
        assert state["longest_streak"] >= longest_seen
        assert state["longest_streak"] >= state["current_streak"]
        longest_seen = state["longest_streak"]
    assert longest_seen == 4
