"""
Area Configuration
Explicitly constructed lookup of area centers and bounding boxes
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from models.schemas import Area
from .settings import DEFAULT_AREA

logger = logging.getLogger(__name__)

# Used when no areas.json is available
DEFAULT_AREAS = [
    {'name': 'Daniel Island', 'lat': 32.845, 'lng': -79.908, 'zoom': 14,
     'south': 32.83, 'north': 32.86, 'west': -79.92, 'east': -79.89},
    {'name': 'Mount Pleasant', 'lat': 32.800, 'lng': -79.860, 'zoom': 14,
     'south': 32.78, 'north': 32.82, 'west': -79.88, 'east': -79.82},
    {'name': 'James Island', 'lat': 32.720, 'lng': -79.950, 'zoom': 14,
     'south': 32.70, 'north': 32.75, 'west': -79.96, 'east': -79.90},
    {'name': 'Downtown Charleston', 'lat': 32.776, 'lng': -79.931, 'zoom': 15,
     'south': 32.76, 'north': 32.80, 'west': -79.95, 'east': -79.92},
    {'name': "Sullivan's & IOP", 'lat': 32.760, 'lng': -79.840, 'zoom': 14,
     'south': 32.75, 'north': 32.80, 'west': -79.87, 'east': -79.77},
]


class AreaConfig:
    """
    Area centers and bounds for one dataset

    Built once by the caller and handed to whatever needs area lookups.
    Bounding boxes are checked in declaration order; the first match wins.
    """

    def __init__(self, areas: Iterable[Union[Area, dict]], default_area: Optional[str] = DEFAULT_AREA):
        self.areas: List[Area] = [
            a if isinstance(a, Area) else Area.model_validate(a) for a in areas
        ]
        self._by_name: Dict[str, Area] = {a.name: a for a in self.areas}
        self.default_area = default_area

    @classmethod
    def default(cls) -> "AreaConfig":
        """Built-in Charleston-area table"""
        return cls(DEFAULT_AREAS)

    @classmethod
    def from_file(cls, path: Union[str, Path], fallback: bool = True) -> "AreaConfig":
        """
        Load areas from a JSON list

        Args:
            path: Path to areas.json
            fallback: Use the built-in table when the file is missing or invalid

        Returns:
            AreaConfig instance
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            config = cls(raw)
            logger.info(f"Loaded {len(config.areas)} areas from {path}")
            return config
        except (OSError, ValueError, TypeError, ValidationError) as e:
            if not fallback:
                raise
            logger.warning(f"Could not load areas from {path}: {e}; using built-in areas")
            return cls.default()

    def names(self) -> List[str]:
        return [a.name for a in self.areas]

    def get(self, name: str) -> Optional[Area]:
        return self._by_name.get(name)

    def center(self, name: str) -> Optional[Dict[str, float]]:
        """Map center for an area, or None if unknown"""
        area = self._by_name.get(name)
        if area is None:
            return None
        return {'lat': area.lat, 'lng': area.lng, 'zoom': area.zoom}

    def area_for(self, lat: Optional[float], lng: Optional[float]) -> Optional[str]:
        """Area whose bounding box holds the point, else the default area"""
        if lat is None or lng is None:
            return self.default_area
        for area in self.areas:
            if area.contains(lat, lng):
                return area.name
        return self.default_area

    def __len__(self):
        return len(self.areas)

    def __contains__(self, name):
        return name in self._by_name
