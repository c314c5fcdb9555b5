import pytest

from session.models import InteractionState, Role, Waypoint
from session.state_machine import consume_click, select_role


def test_initial_state_is_idle():
    assert InteractionState().idle


def test_click_while_idle_is_ignored():
    state = InteractionState()
    new_state, waypoint = consume_click(state, (1.0, 2.0))

    assert new_state == state
    assert waypoint is None


def test_select_then_click_places_waypoint_and_returns_to_idle():
    state = select_role(InteractionState(), Role.START)
    assert state.pending_role is Role.START

    state, waypoint = consume_click(state, (21.15, -86.86))

    assert state.idle
    assert waypoint == Waypoint(role=Role.START, position=(21.15, -86.86))


def test_last_role_selection_wins():
    state = select_role(InteractionState(), Role.START)
    state = select_role(state, Role.END)

    _, waypoint = consume_click(state, (0.0, 0.0))

    assert waypoint.role is Role.END


def test_only_one_click_is_consumed_per_selection():
    state = select_role(InteractionState(), Role.START)
    state, first = consume_click(state, (1.0, 1.0))
    state, second = consume_click(state, (2.0, 2.0))

    assert first.position == (1.0, 1.0)
    assert second is None


def test_waypoint_must_be_finite():
    with pytest.raises(ValueError):
        Waypoint(role=Role.END, position=(float("nan"), 0.0))


def test_role_accepts_its_string_value():
    assert Role("start") is Role.START
