import logging

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from dash import html

from config import ALL, StoryConfig
from data_prep import filter_by_continent, fmt_score, numeric, resolve_boundary_name
from navigation import Gesture
from widgets import control_card, empty_figure, graph, nav_graph_id

logger = logging.getLogger(__name__)


def score_color(score, config: StoryConfig) -> str:
    lo, hi = config.score_domain
    s = pd.to_numeric(score, errors="coerce")
    if pd.isna(s):
        return config.neutral_fill
    t = (np.clip(float(s), lo, hi) - lo) / (hi - lo)
    return px.colors.sample_colorscale(config.color_scale, [float(t)])[0]


def top_and_bottom(countries: pd.DataFrame, n: int) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Top-n by spi_score descending and bottom-n ascending; ties keep dataset order."""
    df = countries.assign(_score=numeric(countries["spi_score"])).dropna(subset=["_score"])
    top = df.sort_values("_score", ascending=False, kind="mergesort").head(n)
    bottom = df.sort_values("_score", ascending=True, kind="mergesort").head(n)
    return top.drop(columns="_score"), bottom.drop(columns="_score")


def map_frame(countries: pd.DataFrame, boundaries: dict, continent: str = ALL) -> pd.DataFrame:
    """One row per boundary feature: its name, the matched country (or None) and score."""
    known = set(countries["country"])
    by_name = countries.set_index("country")
    rows = []
    for feat in boundaries.get("features", []):
        name = str((feat.get("properties") or {}).get("name") or "")
        key = resolve_boundary_name(name, known)
        if key in known:
            rec = by_name.loc[key]
            rows.append({"feature": name, "country": key,
                         "continent": rec["continent"], "spi_score": rec["spi_score"]})
        else:
            rows.append({"feature": name, "country": None, "continent": None, "spi_score": None})

    frame = pd.DataFrame(rows, columns=["feature", "country", "continent", "spi_score"])
    frame["spi_score"] = numeric(frame["spi_score"])
    frame["matched"] = frame["country"].notna()

    # features with no record have no continent, so a continent filter drops them
    if continent != ALL:
        frame = frame[frame["continent"] == continent]
    n_miss = int((~frame["matched"]).sum())
    if n_miss:
        logger.debug("%d boundary features without an SPI record", n_miss)
    return frame.reset_index(drop=True)


def make_world_map(countries: pd.DataFrame, boundaries: dict,
                   continent: str = ALL,
                   config: StoryConfig | None = None) -> go.Figure:
    config = config or StoryConfig()
    frame = map_frame(countries, boundaries, continent)
    if frame.empty:
        return empty_figure("No countries for the selected continent")

    lo, hi = config.score_domain
    have = frame[frame["matched"]]
    missing = frame[~frame["matched"]]

    fig = go.Figure()
    if not have.empty:
        fig.add_trace(go.Choropleth(
            geojson=boundaries,
            featureidkey="properties.name",
            locations=have["feature"],
            z=have["spi_score"],
            zmin=lo, zmax=hi,
            colorscale=config.color_scale,
            customdata=[[c, fmt_score(s)] for c, s in zip(have["country"], have["spi_score"])],
            hovertemplate="<b>%{customdata[0]}</b><br>SPI: %{customdata[1]}<extra></extra>",
            marker_line_color="white", marker_line_width=0.5,
            colorbar=dict(title="SPI"),
            name="SPI",
        ))

    # neutral layer so unknown territories still show (and hover) on the map
    if not missing.empty:
        fig.add_trace(go.Choropleth(
            geojson=boundaries,
            featureidkey="properties.name",
            locations=missing["feature"],
            z=[0] * len(missing),
            colorscale=[[0, config.neutral_fill], [1, config.neutral_fill]],
            showscale=False,
            customdata=[[""] for _ in range(len(missing))],
            hovertemplate="<b>%{location}</b><br>SPI: N/A<extra></extra>",
            marker_line_color="white", marker_line_width=0.5,
            name="No data",
        ))

    fig.update_geos(fitbounds="locations", visible=False, projection_type="natural earth")
    fig.update_layout(
        template="plotly_white",
        margin=dict(t=10, r=10, l=10, b=10),
        clickmode="event",
    )
    return fig


def make_ranked_bars(ranked: pd.DataFrame, title: str,
                     config: StoryConfig | None = None) -> go.Figure:
    config = config or StoryConfig()
    if ranked.empty:
        return empty_figure("No countries to rank")

    scores = numeric(ranked["spi_score"])
    fig = go.Figure(go.Bar(
        x=scores,
        y=ranked["country"],
        orientation="h",
        marker_color=[score_color(s, config) for s in scores],
        text=[f"{s:.2f}" for s in scores],
        textposition="inside",
        hovertemplate="<b>%{y}</b><br>SPI: %{x:.2f}<extra></extra>",
    ))
    fig.update_layout(
        template="plotly_white",
        title=title,
        title_font=dict(size=14),
        xaxis=dict(range=[0, 100], title=None),
        yaxis=dict(autorange="reversed", title=None),
        margin=dict(t=40, r=10, l=10, b=20),
        showlegend=False,
    )
    return fig


def region_label(continent: str) -> str:
    return "the World" if continent == ALL else continent


def render_world(state, dataset, config: StoryConfig):
    continent = state.continent_filter
    countries = filter_by_continent(dataset.countries, continent)
    top, bottom = top_and_bottom(countries, config.rank_n)
    where = region_label(continent)

    scene = html.Div(
        [
            html.Div(
                graph(make_world_map(dataset.countries, dataset.boundaries, continent, config),
                      nav_graph_id(Gesture.SELECT_COUNTRY.value), height="65vh"),
                style={"flex":"3 1 600px"}
            ),
            html.Div(
                control_card([
                    graph(make_ranked_bars(top, f"Top {config.rank_n} in {where}", config), height="30vh"),
                    graph(make_ranked_bars(bottom, f"Bottom {config.rank_n} in {where}", config), height="30vh"),
                ]),
                style={"flex":"1 1 260px"}
            ),
        ],
        style={"display":"flex","flexWrap":"wrap","gap":"14px"}
    )

    if countries.empty:
        caption = f"There is no SPI data for {where}. Pick another continent to keep exploring."
    else:
        caption = (
            f"This world map shows the overall Social Progress Index score for each country in {where}. "
            "Brighter shades indicate higher social progress; grey territories have no SPI data. "
            "Click on a country to drill down and explore its detailed performance."
        )
    return scene, caption
