"""Tests for the CSV seeding tool."""

import pandas as pd
import pytest

from api.db import create_db_engine, make_session_factory
from api.services.earthquakes import EarthquakeService
from ingest.seed import load, main, read_catalog, seed, transform

CSV = """Latitude,Longitude,Magnitude,DateTime
19.246,145.616,5.9,1970/01/04 17:00:40.20
1.863,127.352,5.5,1970/01/06 05:35:51.80
-20.579,-173.972,not-a-number,1970/01/08 17:12:39.10
-25.6,-177.1,6.1,garbage
"""


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "earthquakes.csv"
    path.write_text(CSV)
    return path


def test_transform_maps_columns_and_drops_bad_rows(csv_file):
    df = transform(read_catalog(csv_file))
    assert list(df.columns) == ["location", "magnitude", "date"]
    assert len(df) == 2
    assert df.loc[0, "location"] == "19.246, 145.616"
    assert df.loc[0, "magnitude"] == 5.9
    assert df.loc[0, "date"] == "1970-01-04T17:00:40.200Z"


def test_transform_requires_columns():
    with pytest.raises(ValueError, match="missing columns"):
        transform(pd.DataFrame({"Latitude": [1.0]}))


def test_load_inserts_in_batches(engine, session_factory):
    df = pd.DataFrame(
        {
            "location": [f"{i}, {i}" for i in range(250)],
            "magnitude": [5.0] * 250,
            "date": ["2024-01-01T00:00:00.000Z"] * 250,
        }
    )
    assert load(engine, df, batch_size=100) == 250
    assert EarthquakeService(session_factory).list().total == 250


def test_seed_into_sqlite_file(csv_file, tmp_path):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    assert seed(str(csv_file), url) == 2

    engine = create_db_engine(url)
    try:
        result = EarthquakeService(make_session_factory(engine)).list()
    finally:
        engine.dispose()
    assert result.total == 2
    assert result.data[0].date == "1970-01-06T05:35:51.800Z"


def test_cli(csv_file, tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    assert main([str(csv_file), "--database", url]) == 0
    assert "Successfully seeded 2 earthquakes" in capsys.readouterr().out


def test_coordinates_keep_their_written_form(tmp_path):
    path = tmp_path / "trailing.csv"
    path.write_text("Latitude,Longitude,Magnitude,DateTime\n35.0,139.6910,6.0,2011/03/11 05:46:24.12\n")
    df = transform(read_catalog(path))
    assert df.loc[0, "location"] == "35.0, 139.6910"
