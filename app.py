# app.py — Dash app for the Social Progress Index story (intro -> world -> country -> component)

import logging
import os

from dash import ALL, Dash, Input, Output, State, ctx, dcc, html

from config import StoryConfig
from data_prep import DatasetLoader
from navigation import INITIAL_STATE
from scene import navigate, refresh
from widgets import NAV_BUTTON, NAV_GRAPH, nav_button_id

logger = logging.getLogger(__name__)

# configure before the loader starts so its messages show up
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("SPI_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

# -------------------------
# Data: kicked off once per process, read-only afterwards
# -------------------------
CONFIG = StoryConfig.from_env()
LOADER = DatasetLoader(CONFIG).start()


def current_dataset():
    """The loaded dataset, or None while pending / after a failure."""
    return LOADER.result() if LOADER.ready() else None


# -------------------------
# Dash app scaffolding
# -------------------------
app = Dash(__name__, suppress_callback_exceptions=True)
app.title = "Social Progress Around the World"

app.layout = html.Div(
    [
        html.H2("Social Progress Around the World", style={"margin":"10px 0 8px 0"}),
        html.Div("A drill-down story through the Social Progress Index."),

        dcc.Store(id="nav-state", data=INITIAL_STATE.to_store()),
        dcc.Interval(id="load-poll", interval=CONFIG.load_poll_ms, disabled=False),

        # controls
        html.Div(
            [
                html.Div(id="filter-container",
                         style={"display":"flex","gap":"6px","flexWrap":"wrap"}),
                html.Div(
                    html.Button("← Back", id=nav_button_id("back", "back"), n_clicks=0),
                    id="back-container",
                    style={"display":"none"}
                ),
            ],
            style={"display":"flex","justifyContent":"space-between","alignItems":"center",
                   "margin":"14px 0 18px 0","gap":"14px"}
        ),

        html.Div(id="narrative-container", style={"minHeight":"60vh"}),
        html.Div(id="narrative-text",
                 style={"marginTop":"14px","fontSize":"1.05rem","lineHeight":1.5}),
    ],
    style={"maxWidth":"1300px","margin":"0 auto","padding":"12px"}
)


# callbacks
@app.callback(
    Output("narrative-container","children"),
    Output("narrative-text","children"),
    Output("filter-container","children"),
    Output("back-container","style"),
    Output("load-poll","disabled"),
    Input("nav-state","data"),
    Input("load-poll","n_intervals"),
)
def _render(nav, _tick):
    return refresh(nav, LOADER, CONFIG)


@app.callback(
    Output("nav-state","data"),
    Input({"type": NAV_BUTTON, "gesture": ALL, "value": ALL}, "n_clicks"),
    Input({"type": NAV_GRAPH, "gesture": ALL}, "clickData"),
    State("nav-state","data"),
    prevent_initial_call=True
)
def _navigate(_clicks, _graph_clicks, nav):
    return navigate(nav, ctx.triggered, ctx.triggered_id, current_dataset())


# expose server for hosts like Gunicorn
server = app.server

if __name__ == "__main__":
    logger.info("Starting SPI story with data from %s", CONFIG.data_path)
    app.run(debug=os.environ.get("SPI_DEBUG", "1") == "1")
