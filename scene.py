"""
Scene host: turns a NavigationState into what the page shows.

Every call builds the whole scene from scratch, so nothing interactive from
the previous view survives a state change.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd
from dash import html, no_update

from component_bars import render_component
from config import ALL, CONTINENTS, StoryConfig
from data_prep import lookup_country
from intro import render_intro
from navigation import Gesture, NavigationState, View, can_go_back, transition
from pillar_radial import render_country
from widgets import NAV_BUTTON, NAV_GRAPH, message_panel, nav_button_id
from world_map import render_world

logger = logging.getLogger(__name__)

RENDERERS = {
    View.INTRO:     render_intro,
    View.WORLD:     render_world,
    View.COUNTRY:   render_country,
    View.COMPONENT: render_component,
}


@dataclass
class Scene:
    children: Any
    caption: Any
    filters: list
    back_style: dict


def filter_label(continent: str) -> str:
    return continent[:1].upper() + continent[1:]


def filter_controls(state: NavigationState) -> list:
    # the filter only acts on the world view
    enabled = state.view == View.WORLD
    buttons = []
    for continent in (ALL,) + CONTINENTS:
        active = continent == state.continent_filter
        buttons.append(html.Button(
            filter_label(continent),
            id=nav_button_id(Gesture.SELECT_CONTINENT.value, continent),
            n_clicks=0,
            disabled=not enabled,
            className="filter-button active" if active else "filter-button",
        ))
    return buttons


def back_style(state: NavigationState) -> dict:
    return {"display": "block"} if can_go_back(state) else {"display": "none"}


def render_scene(state: NavigationState, dataset=None,
                 config: StoryConfig | None = None,
                 loading: bool = False) -> Scene:
    config = config or StoryConfig()
    if state.view != View.INTRO and dataset is None:
        if loading:
            children = message_panel("Loading…", "Fetching the Social Progress Index data.")
            caption = "Hang on while the data loads."
        else:
            children = message_panel("Data unavailable",
                                     "The Social Progress Index data could not be loaded.")
            caption = "Only the introduction is available right now."
    else:
        children, caption = RENDERERS[state.view](state, dataset, config)
    return Scene(children=children, caption=caption,
                 filters=filter_controls(state), back_style=back_style(state))


def gesture_from_trigger(trigger_id, value, countries: pd.DataFrame | None = None):
    """
    Map a Dash trigger (component id + new prop value) to (Gesture, payload).

    Returns None for anything that should not move the story: components that
    were just inserted (falsy value), clicks on territories without a record,
    or ids we do not know.
    """
    if not isinstance(trigger_id, dict) or not value:
        return None
    try:
        gesture = Gesture(trigger_id.get("gesture"))
    except ValueError:
        return None

    kind = trigger_id.get("type")
    if kind == NAV_BUTTON:
        return gesture, trigger_id.get("value")
    if kind != NAV_GRAPH:
        return None

    points = value.get("points") if isinstance(value, dict) else None
    if not points:
        return None
    point = points[0]
    custom = point.get("customdata")
    if isinstance(custom, list):
        custom = custom[0] if custom else None

    if gesture == Gesture.SELECT_COUNTRY:
        name = custom or point.get("location")
        if countries is None or lookup_country(countries, name) is None:
            logger.debug("No SPI record for clicked feature %r", point.get("location"))
            return None
        return gesture, name
    if gesture == Gesture.SELECT_PILLAR:
        return (gesture, custom) if custom else None
    return None


# -------------------------
# Callback bodies (app.py wires them to Dash)
# -------------------------
def refresh(nav, loader, config: StoryConfig):
    """Outputs for the render callback: scene, caption, filters, back style, poll disabled."""
    state = NavigationState.from_store(nav)
    # check pending before fetching, so a load finishing in between is picked up next tick
    loading = loader.pending()
    dataset = loader.result() if loader.ready() else None
    scene = render_scene(state, dataset, config, loading=loading)
    return scene.children, scene.caption, scene.filters, scene.back_style, not loading


def navigate(nav, triggered, triggered_id, dataset=None):
    """Store data after the triggering gesture, or no_update when the story stays put."""
    if not triggered:
        return no_update
    resolved = gesture_from_trigger(
        triggered_id,
        triggered[0]["value"],
        dataset.countries if dataset is not None else None,
    )
    if resolved is None:
        return no_update

    state = NavigationState.from_store(nav)
    new = transition(state, *resolved)
    if new == state:
        return no_update
    return new.to_store()
