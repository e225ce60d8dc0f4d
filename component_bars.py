import pandas as pd
import plotly.graph_objects as go
from dash import html

from config import StoryConfig
from data_prep import numeric
from pillars import PILLAR_LABELS, SUB_COMPONENT_LABELS, SUB_COMPONENTS, Pillar, parse_pillar
from widgets import graph, message_panel


def component_scores(record: pd.Series, pillar: Pillar, sort_desc: bool = True) -> pd.DataFrame:
    keys = list(SUB_COMPONENTS[pillar])
    df = pd.DataFrame({
        "key":   keys,
        "label": [SUB_COMPONENT_LABELS[k] for k in keys],
        "score": numeric(pd.Series([record[k] for k in keys])).to_numpy(),
    })
    if sort_desc:
        df = df.sort_values("score", ascending=False, kind="mergesort", na_position="last")
    return df.reset_index(drop=True)


#Component view: the four sub-components of one pillar
def make_component_bars(record: pd.Series, pillar: Pillar,
                        config: StoryConfig | None = None) -> go.Figure:
    config = config or StoryConfig()
    data = component_scores(record, pillar, config.sort_subcomponents)
    pillar_name = PILLAR_LABELS[pillar]

    fig = go.Figure(go.Bar(
        x=data["label"],
        y=data["score"],
        marker_color=config.bar_color,
        marker_line_width=0,
        text=[f"{s:.2f}" if pd.notna(s) else "N/A" for s in data["score"]],
        textposition="outside",
        customdata=data["key"],
        hovertemplate="<b>%{x}</b><br>Score: %{y:.2f}<extra></extra>",
    ))
    fig.update_layout(
        template="plotly_white",
        title=dict(text=f"{pillar_name} in {record['country']}", x=0.5, font=dict(size=24)),
        xaxis=dict(title=None, tickangle=-30, categoryorder="array", categoryarray=list(data["label"])),
        yaxis=dict(title="Score", range=[0, 100]),
        margin=dict(t=70, r=20, l=60, b=120),
        bargap=0.4,
        showlegend=False,
    )
    return fig


def render_component(state, dataset, config: StoryConfig):
    record = dataset.record(state.selected_country)
    pillar = parse_pillar(state.selected_component)
    if record is None or pillar is None:
        panel = message_panel("Component unavailable", "There is nothing to break down for this selection.")
        return panel, "Go back and pick a pillar."

    pillar_name = PILLAR_LABELS[pillar]
    country = record["country"]
    order = ", highest first" if config.sort_subcomponents else ""
    scene = graph(make_component_bars(record, pillar, config), height="65vh")
    caption = html.Div([
        html.H3(f"Deep Dive: {pillar_name} in {country}"),
        html.P([
            "This chart breaks down the ", html.Strong(pillar_name),
            f" score into its four components{order}. It shows the specific areas where "
            f"{country} is performing well and where there are challenges.",
        ]),
    ])
    return scene, caption
