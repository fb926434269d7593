#!/usr/bin/env python3

"""
GFF Coordinate Remapper

Remaps GFF3 feature coordinates from component sequences (contigs,
scaffolds) onto assembled sequences (chromosomes) using mappings built from
an AGP file or a mapping GFF3 file.

Modules:
- core: data structures, mapping engine, builders, reconciler, configuration
- utils: performance monitoring
- tests: unit test suite
"""

__version__ = "1.0.0"

from .core.data_structures import (
    Strand, Interval, PairMapping, Gap, Match, Feature, Classification
)
from .core.exceptions import (
    RemapError, ConfigurationError, RecordParseError, MemoryLimitError
)
from .core.config import RemapConfig, load_config
from .core.mapping import MappingCollection
from .core.builders import MappingCollectionBuilder
from .core.reconciler import FeatureReconciler, ReconciliationState
from .core.pipeline import RemapPipeline

__all__ = [
    # Main pipeline
    'RemapPipeline',
    # Mapping engine
    'MappingCollection', 'MappingCollectionBuilder',
    'FeatureReconciler', 'ReconciliationState',
    # Data structures
    'Strand', 'Interval', 'PairMapping', 'Gap', 'Match', 'Feature', 'Classification',
    # Exceptions
    'RemapError', 'ConfigurationError', 'RecordParseError', 'MemoryLimitError',
    # Configuration
    'RemapConfig', 'load_config'
]
