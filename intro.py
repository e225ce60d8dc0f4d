from dash import html

from navigation import Gesture
from widgets import control_card, nav_button_id

INTRO_TEXT = (
    "The Social Progress Index (SPI) offers a comprehensive framework for measuring a country's "
    "social performance, independent of economic indicators. It assesses how well a society provides "
    "for the needs of its citizens, creates foundations for wellbeing, and expands opportunity. "
    "This interactive story lets you explore the SPI data, from a global overview down to the "
    "specific factors that shape the lives of people around the world."
)


def render_intro(state, dataset=None, config=None):
    scene = control_card(
        [
            html.H2("What is Social Progress?", style={"fontFamily":"'Merriweather', serif"}),
            html.P(INTRO_TEXT, style={"fontSize":"1.2em","lineHeight":1.6}),
            html.Button("Begin the Journey", id=nav_button_id(Gesture.BEGIN.value, "begin"),
                        n_clicks=0, className="intro-button"),
        ],
        padding="50px",
    )
    caption = "Welcome! Click the button above to start exploring the Social Progress Index."
    return scene, caption
