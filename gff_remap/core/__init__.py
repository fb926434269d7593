#!/usr/bin/env python3

"""
Core module for the GFF coordinate remapper.

Contains the data structures, the interval mapping engine, its builders,
the feature reconciler, exception types and configuration management.
"""

from .data_structures import Strand, Interval, PairMapping, Gap, Match, Feature, Classification
from .exceptions import RemapError, ConfigurationError, RecordParseError, MemoryLimitError
from .config import RemapConfig, load_config

__all__ = [
    'Strand', 'Interval', 'PairMapping', 'Gap', 'Match', 'Feature', 'Classification',
    'RemapError', 'ConfigurationError', 'RecordParseError', 'MemoryLimitError',
    'RemapConfig', 'load_config'
]
