#!/usr/bin/env python3

"""
Main pipeline class for GFF coordinate remapping.

Builds the mapping collection once, then streams the input features through
the reconciler into the output GFF3 and writes the failure report.
"""

import os
import logging
from pathlib import Path
from typing import Optional, TextIO

from .builders import MappingCollectionBuilder
from .config import RemapConfig
from .exceptions import ConfigurationError
from .mapping import MappingCollection
from .parsers import GFF3Parser, GFF3Writer, open_text
from .reconciler import FeatureReconciler, ReconciliationState
from ..utils.performance_monitor import PerformanceMonitor


class RemapPipeline:
    """Coordinates mapping construction, reconciliation and reporting."""

    def __init__(self, config: Optional[RemapConfig] = None):
        self.config = config or RemapConfig()
        self.monitor = PerformanceMonitor(
            memory_limit_mb=self.config.memory_limit_mb,
            enabled=self.config.enable_memory_monitoring
        )
        self.collection: Optional[MappingCollection] = None
        self.reconciler: Optional[FeatureReconciler] = None

    def run(self, mapping_file: str, input_file: Optional[str],
            output_file: str = '-', report_file: Optional[str] = None) -> ReconciliationState:
        """
        Run the complete remapping pipeline.

        Args:
            mapping_file: AGP or GFF3 file describing the mappings
            input_file: GFF3 features to remap ('-' reads stdin)
            output_file: Destination GFF3 ('-' writes stdout)
            report_file: Optional plain text failure report

        Returns:
            The final reconciliation state

        Raises:
            ConfigurationError: before any feature is processed
            RecordParseError: on a malformed input feature row
        """
        if not input_file:
            raise ConfigurationError("No input feature file given")
        if input_file != '-' and not os.path.isfile(input_file):
            raise ConfigurationError(f"Input feature file not found: {input_file}")

        logging.info("Starting GFF coordinate remapping")
        logging.info(f"Configuration: {self.config}")
        logging.info(f"Mapping file: {mapping_file}")
        logging.info(f"Input file: {input_file}")
        logging.info(f"Output file: {output_file}")

        self.build_collection(mapping_file)

        with open_text(input_file) as in_handle, open_text(output_file, 'w') as out_handle:
            state = self.remap(in_handle, out_handle, input_file)

        self.reconciler.log_summary(include_ids=self.config.verbose)
        if report_file:
            self.write_report(report_file, mapping_file, input_file)

        self.monitor.log_report()
        return state

    def build_collection(self, mapping_file: str) -> MappingCollection:
        """Build (and optionally swap) the mapping collection."""
        with self.monitor.phase("mapping_construction", unit="pairs") as stats:
            self.collection = MappingCollectionBuilder.from_file(
                mapping_file,
                fmt=self.config.mapping_format,
                feature_type=self.config.feature_type
            )
            if self.config.swap_direction:
                self.collection.swap()
                logging.info("Swapped mapping direction")

            stats.items = self.collection.count()
            logging.info(f"Built {self.collection.count()} mappings over "
                         f"{len(self.collection.sequences())} sequences")

        return self.collection

    def remap(self, in_handle: TextIO, out_handle: TextIO,
              input_name: str = "") -> ReconciliationState:
        """Stream features from in_handle to out_handle."""
        if self.collection is None:
            raise ConfigurationError("Mapping collection has not been built")

        self.reconciler = FeatureReconciler(
            self.collection,
            pass_through_unmapped=self.config.pass_through_unmapped,
            verbose=self.config.verbose
        )
        parser = GFF3Parser(input_name)
        writer = GFF3Writer(out_handle)

        state = self.reconciler.state
        with self.monitor.phase("feature_reconciliation", unit="features") as stats:
            writer.write_header()
            for feature in parser.iter_features(in_handle):
                result = self.reconciler.process(feature)
                if result is not None:
                    writer.write(result)

                stats.items = state.processed
                if state.processed % self.config.batch_size == 0:
                    self.monitor.check_memory_limit()

        logging.info(f"Wrote {writer.written:,} features")
        return self.reconciler.state

    def write_report(self, report_file: str, mapping_file: str, input_file: str) -> None:
        """Write the failure report as plain text."""
        report_path = Path(report_file)
        if report_path.parent:
            report_path.parent.mkdir(parents=True, exist_ok=True)

        with open(report_path, 'w') as f:
            f.write("GFF Coordinate Remapping - Report\n")
            f.write("=" * 50 + "\n\n")
            f.write(f"Mapping file: {mapping_file}\n")
            f.write(f"Input file: {input_file}\n")
            f.write(f"Mappings: {self.collection.count():,}\n\n")

            for line in self.reconciler.failure_report(self.config.report_failed_ids):
                f.write(line + "\n")

        logging.info(f"Generated report: {report_path}")
