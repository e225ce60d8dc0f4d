"""
tests/test_navigation.py — view-state transitions for the SPI story.
"""

import pytest

from navigation import INITIAL_STATE, Gesture, NavigationState, View, can_go_back, transition
from pillars import Pillar


def at(view, country=None, component=None, continent="all"):
    return NavigationState(view=view, selected_country=country,
                           selected_component=component, continent_filter=continent)


def test_initial_state():
    assert INITIAL_STATE == NavigationState(View.INTRO, None, None, "all")


@pytest.mark.parametrize("start, gesture, payload, expected", [
    (at(View.INTRO), Gesture.BEGIN, None, at(View.WORLD)),
    (at(View.WORLD), Gesture.SELECT_COUNTRY, "Norway", at(View.COUNTRY, "Norway")),
    (at(View.WORLD), Gesture.SELECT_CONTINENT, "Europe", at(View.WORLD, continent="Europe")),
    (at(View.COUNTRY, "Norway"), Gesture.SELECT_PILLAR, "opportunity",
     at(View.COMPONENT, "Norway", Pillar.OPPORTUNITY)),
    (at(View.COMPONENT, "Norway", Pillar.OPPORTUNITY), Gesture.BACK, None, at(View.COUNTRY, "Norway")),
    (at(View.COUNTRY, "Norway"), Gesture.BACK, None, at(View.WORLD)),
])
def test_listed_transitions(start, gesture, payload, expected):
    assert transition(start, gesture, payload) == expected


@pytest.mark.parametrize("start, gesture, payload", [
    (at(View.WORLD), Gesture.BACK, None),
    (at(View.INTRO), Gesture.BACK, None),
    (at(View.INTRO), Gesture.SELECT_COUNTRY, "Norway"),
    (at(View.INTRO), Gesture.SELECT_CONTINENT, "Asia"),
    (at(View.WORLD), Gesture.BEGIN, None),
    (at(View.WORLD), Gesture.SELECT_PILLAR, "wellbeing"),
    (at(View.COUNTRY, "Norway"), Gesture.SELECT_COUNTRY, "Chad"),
    (at(View.COUNTRY, "Norway"), Gesture.SELECT_CONTINENT, "Asia"),
    (at(View.COMPONENT, "Norway", Pillar.WELLBEING), Gesture.SELECT_PILLAR, "opportunity"),
    (at(View.COMPONENT, "Norway", Pillar.WELLBEING), Gesture.BEGIN, None),
])
def test_unlisted_gestures_are_noops(start, gesture, payload):
    assert transition(start, gesture, payload) is start


@pytest.mark.parametrize("start, gesture, payload", [
    (at(View.WORLD), Gesture.SELECT_COUNTRY, None),
    (at(View.WORLD), Gesture.SELECT_COUNTRY, ""),
    (at(View.WORLD), Gesture.SELECT_CONTINENT, "Atlantis"),
    (at(View.COUNTRY, "Norway"), Gesture.SELECT_PILLAR, "shelter"),
    (at(View.COUNTRY, "Norway"), Gesture.SELECT_PILLAR, None),
])
def test_bad_payloads_are_noops(start, gesture, payload):
    assert transition(start, gesture, payload) is start


def test_continent_filter_keeps_selection_state():
    state = at(View.WORLD, "Norway", Pillar.WELLBEING, "Europe")
    new = transition(state, Gesture.SELECT_CONTINENT, "Asia")
    assert new.view == View.WORLD
    assert new.continent_filter == "Asia"
    assert new.selected_country == "Norway"
    assert new.selected_component == Pillar.WELLBEING


def test_back_walk_is_inverse_of_drill_down():
    state = transition(INITIAL_STATE, Gesture.BEGIN)
    state = transition(state, Gesture.SELECT_COUNTRY, "Norway")
    state = transition(state, Gesture.SELECT_PILLAR, Pillar.OPPORTUNITY)
    assert state.view == View.COMPONENT

    state = transition(state, Gesture.BACK)
    assert (state.view, state.selected_country, state.selected_component) == (View.COUNTRY, "Norway", None)
    state = transition(state, Gesture.BACK)
    assert state == at(View.WORLD)

    # nothing further back from the world view
    assert transition(state, Gesture.BACK) is state


def test_gesture_accepts_plain_strings():
    assert transition(at(View.INTRO), "begin").view == View.WORLD


def test_store_round_trip():
    state = at(View.COMPONENT, "Norway", Pillar.OPPORTUNITY, "Europe")
    data = state.to_store()
    assert data == {
        "view": "component",
        "selected_country": "Norway",
        "selected_component": "opportunity",
        "continent_filter": "Europe",
    }
    assert NavigationState.from_store(data) == state


def test_from_store_defaults():
    assert NavigationState.from_store(None) == INITIAL_STATE
    assert NavigationState.from_store({"view": "subComponent"}).view == View.INTRO


@pytest.mark.parametrize("view, expected", [
    (View.INTRO, False),
    (View.WORLD, False),
    (View.COUNTRY, True),
    (View.COMPONENT, True),
])
def test_can_go_back(view, expected):
    assert can_go_back(at(view)) is expected
