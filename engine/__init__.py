"""
Engine Module - Spot Filtering and Loading
"""
from .pipeline import SpotFilterPipeline, sort_results, title_key
from .loader import load_records, load_spots, load_venues, init_engine

__all__ = [
    'SpotFilterPipeline',
    'sort_results',
    'title_key',
    'load_records',
    'load_spots',
    'load_venues',
    'init_engine',
]
