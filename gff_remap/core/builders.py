#!/usr/bin/env python3

"""
Builders that populate a MappingCollection from a mapping source.

Two strategies share the same target type:

- AGP: each sequence component row places a component (contig) on an
  assembled object (chromosome, scaffold).
- GFF3: each feature describes its own ID as a sequence placed at
  seq_id:start-end, so features located on that ID can be mapped onto the
  feature's sequence.
"""

import logging
import os
from typing import Optional

from .data_structures import Feature, Interval, PairMapping, Strand
from .exceptions import ConfigurationError, RecordParseError
from .mapping import MappingCollection
from .parsers import AgpRecord, AGPParser, GFF3Parser

AGP_EXTENSIONS = ('.agp', '.agp.txt')


class MappingCollectionBuilder:
    """Construct a MappingCollection from AGP or GFF3 mapping files."""

    def __init__(self, collection: Optional[MappingCollection] = None):
        self.collection = collection if collection is not None else MappingCollection()
        self.skipped = 0

    @classmethod
    def from_file(cls, path: str, fmt: str = "auto",
                  feature_type: Optional[str] = None) -> MappingCollection:
        """Build a collection, picking the strategy from fmt or the file extension."""
        if fmt == "auto":
            fmt = "agp" if path.lower().endswith(AGP_EXTENSIONS) else "gff"

        if fmt == "agp":
            return cls.from_agp(path)
        if fmt == "gff":
            return cls.from_gff(path, feature_type)
        raise ConfigurationError(f"Unknown mapping format: {fmt}")

    @classmethod
    def from_agp(cls, path: str) -> MappingCollection:
        """Build a collection from an AGP file."""
        builder = cls()
        builder.load_agp(path)
        return builder.collection

    @classmethod
    def from_gff(cls, path: str, feature_type: Optional[str] = None) -> MappingCollection:
        """Build a collection from a GFF3 file, optionally using one feature type only."""
        builder = cls()
        builder.load_gff(path, feature_type)
        return builder.collection

    def load_agp(self, path: str) -> int:
        """Add a pair for every sequence component row. Returns the pair count."""
        self._check_source(path, "AGP")
        logging.info(f"Loading AGP mapping file: {path}")

        parser = AGPParser(path)
        gap_rows = 0
        try:
            for record in parser.iter_records():
                if not record.is_component:
                    gap_rows += 1
                    continue
                try:
                    self.collection.add_mapping(self._pair_from_agp(record))
                except ValueError as e:
                    self.skipped += 1
                    logging.warning(f"Skipping AGP component {record.component_id}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read AGP file {path}: {e}")

        self.skipped += parser.skipped
        logging.info(f"Loaded {self.collection.count()} mappings from {path} "
                     f"({gap_rows} gap rows, {self.skipped} rows skipped)")
        return self._finish(path)

    def load_gff(self, path: str, feature_type: Optional[str] = None) -> int:
        """Add a pair for every (matching) GFF3 feature. Returns the pair count."""
        self._check_source(path, "GFF")
        if feature_type:
            logging.info(f"Loading GFF mapping file: {path} (type={feature_type})")
        else:
            logging.info(f"Loading GFF mapping file: {path}")

        parser = GFF3Parser(path)
        try:
            with open(path, 'r') as f:
                for line_num, line in enumerate(f, 1):
                    line = line.rstrip('\r\n')
                    if line.startswith('##FASTA'):
                        break
                    if not line.strip() or line.startswith('#'):
                        continue

                    try:
                        feature = parser.parse_line(line, line_num)
                    except RecordParseError as e:
                        self.skipped += 1
                        logging.warning(str(e))
                        continue

                    if feature_type and feature.type != feature_type:
                        continue

                    if not feature.feature_id:
                        self.skipped += 1
                        logging.warning(f"Skipping {feature.type} at {path}:{line_num} without ID")
                        continue

                    self.collection.add_mapping(self._pair_from_feature(feature))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to read GFF file {path}: {e}")

        logging.info(f"Loaded {self.collection.count()} mappings from {path} "
                     f"({self.skipped} rows skipped)")
        return self._finish(path)

    @staticmethod
    def _pair_from_agp(record: AgpRecord) -> PairMapping:
        component = Interval(record.component_id, record.component_start,
                             record.component_end, Strand.FORWARD)
        assembled = Interval(record.object_id, record.object_start,
                             record.object_end, Strand.from_symbol(record.orientation))
        return PairMapping(component=component, assembled=assembled)

    @staticmethod
    def _pair_from_feature(feature: Feature) -> PairMapping:
        component = Interval(feature.feature_id, 1, feature.length,
                             Strand.from_symbol(feature.strand))
        assembled = Interval(feature.seq_id, feature.start, feature.end, Strand.FORWARD)
        return PairMapping(component=component, assembled=assembled)

    @staticmethod
    def _check_source(path: str, label: str) -> None:
        if not path:
            raise ConfigurationError(f"No {label} mapping file given")
        if not os.path.isfile(path):
            raise ConfigurationError(f"{label} mapping file not found: {path}")
        if os.path.getsize(path) == 0:
            raise ConfigurationError(f"{label} mapping file is empty: {path}")

    def _finish(self, path: str) -> int:
        count = self.collection.count()
        if count == 0:
            raise ConfigurationError(f"No usable mappings found in {path}")
        return count
