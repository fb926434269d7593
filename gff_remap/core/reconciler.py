#!/usr/bin/env python3

"""
Single-pass feature reconciliation.

Each feature is mapped through a MappingCollection and, depending on the
shape of the result, is remapped, passed through or dropped. Parent
references are filtered against the features that remapped earlier in the
same stream, so parents must precede their children in the input.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Set

from .data_structures import Classification, Feature, Gap, Match, Segment
from .mapping import MappingCollection


@dataclass
class ReconciliationState:
    """Mutable state of one reconciliation pass."""
    mapped_ids: Set[str] = field(default_factory=set)
    failures: Dict[str, List[Feature]] = field(default_factory=lambda: defaultdict(list))
    processed: int = 0
    mapped: int = 0
    unmapped: int = 0
    passed_through: int = 0
    failed: int = 0
    orphaned: int = 0

    @property
    def emitted(self) -> int:
        return self.mapped + self.passed_through


class FeatureReconciler:
    """Remap a feature stream and track mapped and failed features."""

    def __init__(self, collection: MappingCollection,
                 pass_through_unmapped: bool = False,
                 verbose: bool = False,
                 state: Optional[ReconciliationState] = None):
        self.collection = collection
        self.pass_through_unmapped = pass_through_unmapped
        self.verbose = verbose
        self.state = state if state is not None else ReconciliationState()

    @staticmethod
    def classify(segments: List[Segment]) -> Classification:
        """Classify a mapping result as unmapped, clean or spanning."""
        gaps = sum(1 for s in segments if isinstance(s, Gap))
        matches = sum(1 for s in segments if isinstance(s, Match))

        if gaps == 1 and matches == 0:
            return Classification.UNMAPPED
        if matches == 1 and gaps == 0:
            return Classification.CLEAN
        return Classification.SPANNING

    def reconcile(self, features: Iterable[Feature]) -> Iterator[Feature]:
        """Yield the features to emit, in input order."""
        for feature in features:
            result = self.process(feature)
            if result is not None:
                yield result

    def process(self, feature: Feature) -> Optional[Feature]:
        """Reconcile a single feature. Returns it if it should be emitted."""
        self.state.processed += 1
        segments = self.collection.map(feature.location)
        outcome = self.classify(segments)

        if outcome is Classification.UNMAPPED:
            return self._handle_unmapped(feature)

        if outcome is Classification.CLEAN:
            return self._handle_clean(feature, segments[0])

        return self._handle_spanning(feature, segments)

    def _handle_unmapped(self, feature: Feature) -> Optional[Feature]:
        self.state.unmapped += 1
        if self.pass_through_unmapped:
            self.state.passed_through += 1
            if self.verbose:
                logging.debug(f"Passing through unmapped {feature.type} {feature.label()} "
                              f"on {feature.seq_id}")
            return feature

        if self.verbose:
            logging.debug(f"Dropping unmapped {feature.type} {feature.label()} on {feature.seq_id}")
        return None

    def _handle_clean(self, feature: Feature, match: Match) -> Feature:
        old_location = feature.location
        feature.relocate(match.mapped_range)
        self.state.mapped += 1

        if feature.feature_id:
            self.state.mapped_ids.add(feature.feature_id)

        if self.verbose:
            logging.debug(f"Mapped {feature.type} {feature.label()} {old_location} -> {match.mapped_range}")

        parents = feature.parents
        if parents:
            kept = [p for p in parents if p in self.state.mapped_ids]
            if len(kept) != len(parents):
                feature.set_parents(kept)
                if not kept:
                    self.state.orphaned += 1
                if self.verbose:
                    dropped = [p for p in parents if p not in self.state.mapped_ids]
                    logging.debug(f"Removed unmapped parents {','.join(dropped)} "
                                  f"from {feature.label()}")

        return feature

    def _handle_spanning(self, feature: Feature, segments: List[Segment]) -> None:
        self.state.failed += 1
        self.state.failures[feature.original_seq_id].append(feature)
        if self.verbose:
            logging.debug(f"Dropping {feature.type} {feature.label()} at {feature.location}: "
                          f"spans {len(segments)} mapping segments")
        return None

    def failure_report(self, include_ids: bool = True) -> List[str]:
        """Summary lines: totals, then failures per original sequence."""
        lines = [
            f"Features processed: {self.state.processed:,}",
            f"Features mapped: {self.state.mapped:,}",
            f"Features unmapped: {self.state.unmapped:,} "
            f"({self.state.passed_through:,} passed through)",
            f"Features failed: {self.state.failed:,}",
            f"Features orphaned: {self.state.orphaned:,}",
        ]

        for seq_id in sorted(self.state.failures):
            failed = self.state.failures[seq_id]
            lines.append(f"{seq_id}: {len(failed)} failed")
            if include_ids:
                for feature in failed:
                    lines.append(f"  {feature.type}\t{feature.label()}\t{feature.start}-{feature.end}")

        return lines

    def log_summary(self, include_ids: bool = False) -> None:
        for line in self.failure_report(include_ids):
            logging.info(line)
