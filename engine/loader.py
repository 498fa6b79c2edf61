"""
Record Loading and Engine Initialization
Reads spot/venue exports from the data store and validates them
"""

import json
from pathlib import Path
from typing import List, Tuple, Type, Union

import pandas as pd
from pydantic import BaseModel, ValidationError

from config import (
    AREAS_PATH,
    SPOTS_PATH,
    VENUES_PATH,
    AreaConfig,
    get_logger,
)
from models import Spot, Venue

from .pipeline import SpotFilterPipeline

logger = get_logger(__name__)


def _read_frame(path: Path) -> pd.DataFrame:
    """Read a .json, .csv or .parquet export into a DataFrame"""
    suffix = path.suffix.lower()
    if suffix == '.parquet':
        return pd.read_parquet(path)
    if suffix == '.csv':
        return pd.read_csv(path, dtype=str)
    return pd.read_json(path, orient='records', dtype=False, convert_dates=False)


def _frame_to_records(df: pd.DataFrame) -> List[dict]:
    """
    Plain-Python records from a DataFrame

    Duplicate IDs keep the last row. The JSON round trip turns numpy scalars
    into Python types and NaN into None.
    """
    if df.empty:
        return []
    if 'id' in df.columns:
        df = df.drop_duplicates(subset='id', keep='last')
    return json.loads(df.to_json(orient='records'))


def load_records(path: Union[str, Path], model: Type[BaseModel]) -> list:
    """
    Load and validate records from an export file

    Args:
        path: Path to a .json, .csv or .parquet file
        model: Pydantic model to validate each record with

    Returns:
        List of validated models. A missing or unreadable file gives an empty
        list; invalid records are logged and skipped.
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"{model.__name__} export not found at {path}")
        return []

    try:
        df = _read_frame(path)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {path}: {e}")
        return []

    records = _frame_to_records(df)
    valid = []
    skipped = 0
    for record in records:
        try:
            valid.append(model.model_validate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping invalid {model.__name__} {record.get('id')!r}: {e.error_count()} error(s)")

    logger.info(f"✓ Loaded {len(valid)} {model.__name__.lower()}s from {path}" +
                (f" ({skipped} skipped)" if skipped else ""))
    return valid


def load_spots(path: Union[str, Path] = SPOTS_PATH) -> List[Spot]:
    """Load spots from the data store export"""
    return load_records(path, Spot)


def load_venues(path: Union[str, Path] = VENUES_PATH) -> List[Venue]:
    """Load venues from the data store export"""
    return load_records(path, Venue)


def init_engine(spots_path: Union[str, Path] = SPOTS_PATH,
                venues_path: Union[str, Path] = VENUES_PATH,
                areas_path: Union[str, Path] = AREAS_PATH,
                tz=None) -> Tuple[SpotFilterPipeline, List[Spot]]:
    """
    Load exports and build the pipeline

    Args:
        spots_path: Spot export
        venues_path: Venue export
        areas_path: areas.json; falls back to the built-in areas
        tz: Optional timezone overriding SPOT_TIMEZONE

    Returns:
        Tuple of (pipeline, spots)
    """
    venues = load_venues(venues_path)
    spots = load_spots(spots_path)
    areas = AreaConfig.from_file(areas_path)

    pipeline = SpotFilterPipeline(venues=venues, areas=areas, tz=tz)
    return pipeline, spots
