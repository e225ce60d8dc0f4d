import os
from dataclasses import dataclass, field

# -------------------------
# Data locations
# -------------------------
SPI_DATA_PATH = "spi.csv"
WORLD_TOPOLOGY_URL = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"

# continent taxonomy (closed set) + synthetic "all"
ALL = "all"
CONTINENTS = ("Asia", "Europe", "Africa", "North America", "South America", "Oceania")


@dataclass
class StoryConfig:
    data_path: str = SPI_DATA_PATH
    world_url: str = WORLD_TOPOLOGY_URL
    request_timeout: float = 30.0

    # world map
    color_scale: str = "plasma"
    score_domain: tuple = (40.0, 100.0)
    neutral_fill: str = "#cccccc"
    rank_n: int = 5

    # country + component views
    pillar_colors: dict = field(default_factory=lambda: {
        "basic_human_needs": "#e74c3c",
        "wellbeing":         "#27ae60",
        "opportunity":       "#8e44ad",
    })
    bar_color: str = "#3498db"
    sort_subcomponents: bool = True

    # how often the page re-checks a pending load
    load_poll_ms: int = 500

    @classmethod
    def from_env(cls) -> "StoryConfig":
        cfg = cls()
        cfg.data_path = os.environ.get("SPI_DATA_PATH", cfg.data_path)
        cfg.world_url = os.environ.get("SPI_WORLD_URL", cfg.world_url)
        if os.environ.get("SPI_RANK_N"):
            cfg.rank_n = int(os.environ["SPI_RANK_N"])
        if os.environ.get("SPI_REQUEST_TIMEOUT"):
            cfg.request_timeout = float(os.environ["SPI_REQUEST_TIMEOUT"])
        return cfg
