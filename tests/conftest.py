import json

import pandas as pd
import pytest

from config import StoryConfig
from data_prep import SpiDataset
from pillars import score_columns


def make_row(country, continent, spi, rank, **scores):
    row = {"country": country, "continent": continent, "spi_score": str(spi), "spi_rank": str(rank)}
    for col in score_columns():
        row[col] = str(scores.get(col, 50.0))
    return row


@pytest.fixture
def countries() -> pd.DataFrame:
    rows = [
        make_row("Norway", "Europe", 94.2, 1,
                 basic_human_needs=96.1, wellbeing=93.0, opportunity=93.5,
                 personal_rights=95.0, personal_freedom_choice=91.2,
                 inclusiveness=88.4, access_adv_edu=97.9),
        make_row("Denmark", "Europe", 92.9, 2),
        make_row("Chad", "Africa", 33.4, 168),
        make_row("Japan", "Asia", 89.0, 10),
        make_row("Finland", "Europe", 92.9, 3),
        make_row("Canada", "North America", 90.1, 7),
        make_row("Brazil", "South America", 70.0, 60),
        make_row("New Zealand", "Oceania", 90.1, 8),
        make_row("United States", "North America", 84.7, 25),
        make_row("Kenya", "Africa", 58.3, 115),
    ]
    # loaded tables are string typed; numbers are coerced where used
    return pd.DataFrame(rows).astype(str)


@pytest.fixture
def topology() -> dict:
    return {
        "type": "Topology",
        "transform": {"scale": [1, 1], "translate": [0, 0]},
        "arcs": [
            [[0, 0], [1, 0], [0, 1], [-1, 0], [0, -1]],
            [[2, 0], [1, 0], [0, 1], [-1, 0], [0, -1]],
            [[5, 5], [1, 0], [0, 1], [-1, 0], [0, -1]],
        ],
        "objects": {
            "countries": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "arcs": [[0]], "id": "578", "properties": {"name": "Norway"}},
                    {"type": "Polygon", "arcs": [[1]], "properties": {"name": "Atlantis"}},
                    {"type": "MultiPolygon", "arcs": [[[~2]]], "properties": {"name": "United States of America"}},
                    {"type": "Polygon", "arcs": [[0]], "properties": {"name": "Chad"}},
                ],
            }
        },
    }


def square(x, y):
    return [[[x, y], [x + 1, y], [x + 1, y + 1], [x, y + 1], [x, y]]]


def feature(name, geometry):
    return {"type": "Feature", "properties": {"name": name}, "geometry": geometry}


# same features as `topology`, already decoded
@pytest.fixture
def boundaries() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            feature("Norway", {"type": "Polygon", "coordinates": square(0, 0)}),
            feature("Atlantis", {"type": "Polygon", "coordinates": square(2, 0)}),
            feature("United States of America", {"type": "MultiPolygon", "coordinates": [square(5, 5)]}),
            feature("Chad", {"type": "Polygon", "coordinates": square(0, 0)}),
        ],
    }


@pytest.fixture
def dataset(countries, boundaries) -> SpiDataset:
    return SpiDataset(countries=countries, boundaries=boundaries)


@pytest.fixture
def config() -> StoryConfig:
    return StoryConfig()


@pytest.fixture
def data_files(tmp_path, countries, topology):
    csv_path = tmp_path / "spi.csv"
    countries.to_csv(csv_path, index=False)
    world_path = tmp_path / "world.json"
    world_path.write_text(json.dumps(topology), encoding="utf-8")
    return csv_path, world_path
