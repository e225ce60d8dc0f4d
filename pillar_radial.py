import pandas as pd
import plotly.graph_objects as go
from dash import html

from config import StoryConfig
from data_prep import fmt_rank, fmt_score, numeric
from navigation import Gesture
from pillars import PILLAR_LABELS, Pillar
from widgets import graph, message_panel, nav_graph_id


def pillar_scores(record: pd.Series) -> pd.DataFrame:
    return pd.DataFrame({
        "pillar": [p.value for p in Pillar],
        "label":  [PILLAR_LABELS[p] for p in Pillar],
        "score":  numeric(pd.Series([record[p.value] for p in Pillar])).to_numpy(),
    })


#Country view: one sector per pillar, radius = pillar score
def make_pillar_radial(record: pd.Series, config: StoryConfig | None = None) -> go.Figure:
    config = config or StoryConfig()
    data = pillar_scores(record)
    theta = [f"{lbl}<br>{fmt_score(s)}" for lbl, s in zip(data["label"], data["score"])]

    fig = go.Figure(go.Barpolar(
        r=data["score"],
        theta=theta,
        marker_color=[config.pillar_colors.get(p, "#888") for p in data["pillar"]],
        marker_line_color="white",
        marker_line_width=2,
        customdata=data["pillar"],
        hovertemplate="<b>%{theta}</b><br>Click to see its components<extra></extra>",
        opacity=0.9,
    ))
    fig.update_layout(
        template="plotly_white",
        title=dict(text=str(record["country"]), x=0.5, font=dict(size=28)),
        polar=dict(
            hole=0.3,
            radialaxis=dict(range=[0, 100], showticklabels=False, ticks=""),
            angularaxis=dict(direction="clockwise", rotation=90),
        ),
        margin=dict(t=70, r=40, l=40, b=40),
        showlegend=False,
        clickmode="event",
    )
    return fig


def render_country(state, dataset, config: StoryConfig):
    record = dataset.record(state.selected_country)
    if record is None:
        panel = message_panel("Country unavailable",
                              f"There is no SPI record for {state.selected_country}.")
        return panel, "Go back to the map and pick another country."

    name = record["country"]
    scene = graph(make_pillar_radial(record, config), nav_graph_id(Gesture.SELECT_PILLAR.value), height="65vh")
    caption = html.Div([
        html.H3(f"{name}'s Social Progress"),
        html.P([
            "Overall SPI Score: ", html.Strong(fmt_score(record["spi_score"])),
            f" (Rank: {fmt_rank(record['spi_rank'])})",
        ]),
        html.P(
            f"This chart shows the three main pillars of social progress for {name}. "
            "Click on a colored segment to drill down further into its components and see "
            "what drives this country's performance."
        ),
    ])
    return scene, caption
