import plotly.graph_objects as go
from dash import dcc, html

NAV_BUTTON = "nav-button"
NAV_GRAPH = "nav-graph"


def nav_button_id(gesture: str, value: str) -> dict:
    return {"type": NAV_BUTTON, "gesture": gesture, "value": value}


def nav_graph_id(gesture: str) -> dict:
    return {"type": NAV_GRAPH, "gesture": gesture}


#wrapper for cards
def control_card(children, **style):
    return html.Div(
        children,
        style={
            "background":"#fff","border":"1px solid #e9ecef","borderRadius":"12px",
            "padding":"14px","boxShadow":"0 2px 8px rgba(0,0,0,0.04)",
            **style
        }
    )


def empty_figure(msg: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=msg, showarrow=False, xref="paper", yref="paper", x=0.5, y=0.5)
    fig.update_layout(
        template="plotly_white",
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=40, r=20, t=40, b=40),
    )
    return fig


def message_panel(title: str, body: str):
    return control_card([html.H3(title), html.P(body)], margin="40px auto", maxWidth="640px")


def graph(figure: go.Figure, graph_id=None, height: str = "60vh"):
    kwargs = {"id": graph_id} if graph_id is not None else {}
    return dcc.Graph(
        figure=figure,
        config={"displayModeBar": False, "responsive": True},
        style={"width":"100%","height":height},
        **kwargs
    )
