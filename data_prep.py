import json
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from io import BytesIO, StringIO

import geopandas as gpd
import pandas as pd
import requests

from config import ALL, CONTINENTS, StoryConfig
from pillars import score_columns

logger = logging.getLogger(__name__)

ID_COLUMNS = ["country", "continent", "spi_score", "spi_rank"]
REQUIRED_COLUMNS = ID_COLUMNS + score_columns()

# topology object holding the country shapes (world-atlas naming)
BOUNDARY_LAYER = "countries"

# boundary names (world-atlas) -> dataset names
BOUNDARY_NAME_ALIASES = {
    "United States of America": "United States",
    "Dem. Rep. Congo":          "Democratic Republic of Congo",
    "Congo":                    "Republic of Congo",
    "Central African Rep.":     "Central African Republic",
    "Bosnia and Herz.":         "Bosnia and Herzegovina",
    "Dominican Rep.":           "Dominican Republic",
    "S. Sudan":                 "South Sudan",
    "Eq. Guinea":               "Equatorial Guinea",
    "Côte d'Ivoire":            "Cote d'Ivoire",
    "eSwatini":                 "Eswatini",
    "Solomon Is.":              "Solomon Islands",
    "Czechia":                  "Czech Republic",
    "Macedonia":                "North Macedonia",
}


class LoadError(Exception):
    """One of the input resources is missing or malformed."""


@dataclass(frozen=True)
class SpiDataset:
    countries: pd.DataFrame
    boundaries: dict

    def record(self, name) -> pd.Series | None:
        return lookup_country(self.countries, name)


# -------------------------
# Continent filter
# -------------------------
def filter_by_continent(countries: pd.DataFrame, continent: str) -> pd.DataFrame:
    if continent == ALL:
        return countries.copy()
    return countries[countries["continent"] == continent].copy()


# -------------------------
# Point-of-use helpers
# -------------------------
def numeric(series) -> pd.Series:
    return pd.to_numeric(series, errors="coerce")


def fmt_score(value) -> str:
    v = pd.to_numeric(value, errors="coerce")
    return "N/A" if pd.isna(v) else f"{float(v):.2f}"


def fmt_rank(value) -> str:
    v = pd.to_numeric(value, errors="coerce")
    if pd.isna(v):
        return "N/A"
    return str(int(v)) if float(v).is_integer() else str(v)


def lookup_country(countries: pd.DataFrame, name) -> pd.Series | None:
    if not name:
        return None
    hit = countries[countries["country"] == name]
    if hit.empty:
        return None
    return hit.iloc[0]


def resolve_boundary_name(name: str, known: set) -> str:
    if name in known:
        return name
    alias = BOUNDARY_NAME_ALIASES.get(name)
    return alias if alias in known else name


# -------------------------
# Fetching + validation
# -------------------------
def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def read_countries(location: str, timeout: float = 30.0) -> pd.DataFrame:
    try:
        if _is_url(location):
            resp = requests.get(location, timeout=timeout)
            resp.raise_for_status()
            df = pd.read_csv(StringIO(resp.text), dtype=str)
        else:
            df = pd.read_csv(location, dtype=str)
    except (OSError, requests.RequestException, ValueError) as exc:
        # ValueError covers ParserError, EmptyDataError and UnicodeDecodeError
        raise LoadError(f"Could not read SPI table from {location}: {exc}") from exc

    df.columns = [c.strip() for c in df.columns]
    missing = set(REQUIRED_COLUMNS).difference(df.columns)
    if missing:
        raise LoadError(f"SPI table is missing required columns: {sorted(missing)}")

    df["country"] = df["country"].str.strip()
    df["continent"] = df["continent"].str.strip()
    dupes = df.loc[df["country"].duplicated(), "country"].tolist()
    if dupes:
        raise LoadError(f"SPI table has duplicate country rows: {dupes}")

    unknown = sorted(set(df["continent"].dropna()) - set(CONTINENTS))
    if unknown:
        logger.warning("Continents outside the known set: %s", unknown)
    return df.reset_index(drop=True)


def read_boundaries(location: str, timeout: float = 30.0) -> dict:
    try:
        if _is_url(location):
            resp = requests.get(location, timeout=timeout)
            resp.raise_for_status()
            raw = resp.json()
        else:
            with open(location, "r", encoding="utf-8") as f:
                raw = json.load(f)
    except (OSError, requests.RequestException, ValueError) as exc:
        raise LoadError(f"Could not read world boundaries from {location}: {exc}") from exc

    return to_feature_collection(raw, source=location)


def _arc_refs(arcs):
    if isinstance(arcs, int):
        yield arcs
    elif isinstance(arcs, list):
        for a in arcs:
            yield from _arc_refs(a)
    else:
        raise LoadError(f"Bad arc reference {arcs!r}")


def _check_arcs(topology: dict, geometries: list):
    n_arcs = len(topology.get("arcs") or [])
    for geom in geometries:
        if not isinstance(geom, dict):
            raise LoadError(f"Bad geometry {geom!r}")
        if geom.get("type") == "GeometryCollection":
            _check_arcs(topology, geom.get("geometries") or [])
            continue
        for ref in _arc_refs(geom.get("arcs", [])):
            # negative refs (~i) walk arc i backwards
            if (~ref if ref < 0 else ref) >= n_arcs:
                raise LoadError(f"Geometry references arc {ref} but the topology has {n_arcs}")


def to_feature_collection(raw, source: str = "boundary data") -> dict:
    """
    GeoJSON FeatureCollection for a world-atlas Topology (via GDAL's TopoJSON
    driver) or an already decoded FeatureCollection, which is returned as is.
    """
    if not isinstance(raw, dict):
        raise LoadError(f"{source} is not a JSON object")
    kind = raw.get("type")
    if kind == "FeatureCollection":
        return raw
    objects = raw.get("objects") if kind == "Topology" else None
    if not isinstance(objects, dict) or not isinstance(objects.get(BOUNDARY_LAYER), dict):
        raise LoadError(f"{source} is neither a FeatureCollection nor a Topology "
                        f"with a '{BOUNDARY_LAYER}' object")
    _check_arcs(raw, objects[BOUNDARY_LAYER].get("geometries") or [])

    try:
        gdf = gpd.read_file(BytesIO(json.dumps(raw).encode("utf-8")), layer=BOUNDARY_LAYER)
    except (OSError, RuntimeError, ValueError) as exc:
        raise LoadError(f"World boundaries at {source} are malformed: {exc}") from exc
    return json.loads(gdf.to_json())


def feature_names(collection: dict) -> list[str]:
    return [str((f.get("properties") or {}).get("name") or "") for f in collection.get("features", [])]


def load(config: StoryConfig) -> SpiDataset:
    """Fetch both resources concurrently; fails with LoadError if either does."""
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="spi-load") as pool:
        f_countries = pool.submit(read_countries, config.data_path, config.request_timeout)
        f_bounds = pool.submit(read_boundaries, config.world_url, config.request_timeout)
        wait([f_countries, f_bounds])
        countries = f_countries.result()
        boundaries = f_bounds.result()

    known = set(countries["country"])
    names = feature_names(boundaries)
    n_matched = sum(resolve_boundary_name(n, known) in known for n in names)
    logger.info("Loaded %d countries and %d boundary features (%d matched)",
                len(countries), len(names), n_matched)
    return SpiDataset(countries=countries, boundaries=boundaries)


class DatasetLoader:
    """Runs `load` in the background so the intro can render meanwhile."""

    def __init__(self, config: StoryConfig):
        self.config = config
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="spi-loader")
        self._future = None

    def start(self) -> "DatasetLoader":
        if self._future is None:
            logger.info("Loading SPI data from %s and %s", self.config.data_path, self.config.world_url)
            self._future = self._pool.submit(load, self.config)
            self._future.add_done_callback(self._log_outcome)
            self._pool.shutdown(wait=False)
        return self

    @staticmethod
    def _log_outcome(future):
        exc = future.exception()
        if exc is not None:
            logger.error("SPI data load failed: %s", exc)

    def ready(self) -> bool:
        return self._future is not None and self._future.done() and self._future.exception() is None

    def failed(self) -> bool:
        return self._future is not None and self._future.done() and self._future.exception() is not None

    def pending(self) -> bool:
        return self._future is None or not self._future.done()

    def result(self) -> SpiDataset:
        if self._future is None:
            raise LoadError("Data load was never started")
        return self._future.result()


# for local runs: `python data_prep.py` checks both resources load
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ds = load(StoryConfig.from_env())
    print(ds.countries.head())
