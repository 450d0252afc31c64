# ingest/seed.py
"""
Seed the earthquakes table from a CSV catalog.

Expected columns: Latitude, Longitude, Magnitude, DateTime

    python -m ingest.seed data/earthquakes1970-2014.csv
"""
import argparse
import logging

import pandas as pd
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from api import config
from api.db import create_db_engine, init_db
from schemas.tables import Earthquake

logger = logging.getLogger(__name__)

BATCH_SIZE = 100
REQUIRED_COLUMNS = ["Latitude", "Longitude", "Magnitude", "DateTime"]


def read_catalog(csv_path: str) -> pd.DataFrame:
    # coordinates stay as written in the file: "139.6910" must not become "139.691"
    return pd.read_csv(csv_path, dtype={"Latitude": str, "Longitude": str})


def transform(df: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {missing}")

    out = pd.DataFrame()
    out["location"] = df["Latitude"].astype(str).str.strip() + ", " + df["Longitude"].astype(str).str.strip()
    out["magnitude"] = pd.to_numeric(df["Magnitude"], errors="coerce")
    out["date"] = pd.to_datetime(df["DateTime"], errors="coerce", utc=True)

    # rows with unusable magnitude or date are dropped
    out = out[out["magnitude"].notna() & out["date"].notna()].copy()
    # millisecond precision, UTC: 1970-01-04T17:00:40.200Z
    out["date"] = out["date"].dt.strftime("%Y-%m-%dT%H:%M:%S.%f").str[:-3] + "Z"
    return out.reset_index(drop=True)


def load(engine: Engine, df: pd.DataFrame, batch_size: int = BATCH_SIZE) -> int:
    rows = df.to_dict(orient="records")
    with engine.begin() as conn:
        for start in range(0, len(rows), batch_size):
            conn.execute(insert(Earthquake), rows[start:start + batch_size])
    return len(rows)


def seed(csv_path: str, database_url: str = config.DATABASE) -> int:
    engine = create_db_engine(database_url)
    try:
        init_db(engine)
        df = transform(read_catalog(csv_path))
        count = load(engine, df)
    finally:
        engine.dispose()
    logger.info("Seeded %d earthquakes from %s", count, csv_path)
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Load earthquakes from a CSV file.")
    parser.add_argument("csv_path")
    parser.add_argument("--database", default=config.DATABASE, help="SQLAlchemy URL (default: $DATABASE)")
    args = parser.parse_args(argv)

    config.configure_logging()
    count = seed(args.csv_path, args.database)
    print(f"Successfully seeded {count} earthquakes")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
