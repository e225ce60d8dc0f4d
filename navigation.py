"""
View-state navigation for the SPI story.

The state is an immutable value; `transition` is the only place a new one is
made. Dash keeps it client side in a dcc.Store, hence `to_store`/`from_store`.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum

from config import ALL, CONTINENTS
from pillars import Pillar, parse_pillar

logger = logging.getLogger(__name__)


class View(str, Enum):
    INTRO = "intro"
    WORLD = "world"
    COUNTRY = "country"
    COMPONENT = "component"


class Gesture(str, Enum):
    BEGIN = "begin"
    SELECT_COUNTRY = "select_country"
    SELECT_CONTINENT = "select_continent"
    SELECT_PILLAR = "select_pillar"
    BACK = "back"


@dataclass(frozen=True)
class NavigationState:
    view: View = View.INTRO
    selected_country: str | None = None
    selected_component: Pillar | None = None
    continent_filter: str = ALL

    def to_store(self) -> dict:
        return {
            "view": self.view.value,
            "selected_country": self.selected_country,
            "selected_component": self.selected_component.value if self.selected_component else None,
            "continent_filter": self.continent_filter,
        }

    @classmethod
    def from_store(cls, data: dict | None) -> "NavigationState":
        if not data:
            return cls()
        try:
            view = View(data.get("view", View.INTRO.value))
        except ValueError:
            view = View.INTRO
        continent = data.get("continent_filter") or ALL
        return cls(
            view=view,
            selected_country=data.get("selected_country"),
            selected_component=parse_pillar(data.get("selected_component")),
            continent_filter=continent,
        )


INITIAL_STATE = NavigationState()


def _begin(state, _payload):
    return replace(state, view=View.WORLD)


def _select_country(state, payload):
    if not payload:
        return state
    return replace(state, view=View.COUNTRY, selected_country=str(payload))


def _select_continent(state, payload):
    if payload != ALL and payload not in CONTINENTS:
        return state
    return replace(state, continent_filter=payload)


def _select_pillar(state, payload):
    pillar = parse_pillar(payload)
    if pillar is None:
        return state
    return replace(state, view=View.COMPONENT, selected_component=pillar)


def _back_to_country(state, _payload):
    return replace(state, view=View.COUNTRY, selected_component=None)


def _back_to_world(state, _payload):
    return replace(state, view=View.WORLD, selected_country=None)


# (from view, gesture) -> edge; anything missing is a no-op
TRANSITIONS = {
    (View.INTRO, Gesture.BEGIN):               _begin,
    (View.WORLD, Gesture.SELECT_COUNTRY):      _select_country,
    (View.WORLD, Gesture.SELECT_CONTINENT):    _select_continent,
    (View.COUNTRY, Gesture.SELECT_PILLAR):     _select_pillar,
    (View.COMPONENT, Gesture.BACK):            _back_to_country,
    (View.COUNTRY, Gesture.BACK):              _back_to_world,
}


def transition(state: NavigationState, gesture: Gesture, payload=None) -> NavigationState:
    edge = TRANSITIONS.get((state.view, Gesture(gesture)))
    if edge is None:
        logger.debug("Ignoring %s in %s view", gesture, state.view.value)
        return state
    new = edge(state, payload)
    if new is not state:
        logger.debug("%s: %s -> %s", Gesture(gesture).value, state.view.value, new.view.value)
    return new


def can_go_back(state: NavigationState) -> bool:
    return (state.view, Gesture.BACK) in TRANSITIONS
