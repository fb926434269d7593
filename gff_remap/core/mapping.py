#!/usr/bin/env python3

"""
Interval coordinate mapping.

A MappingCollection holds PairMappings indexed by component sequence and
splits any query interval into an ordered list of Gap and Match segments.
"""

import logging
from typing import Dict, List, Optional, Tuple

from intervaltree import IntervalTree

from .data_structures import Gap, Interval, Match, PairMapping, Segment


class MappingCollection:
    """Index of PairMappings keyed by component sequence name."""

    def __init__(self):
        self._pairs: List[PairMapping] = []
        self._index: Dict[str, IntervalTree] = {}

    def add_mapping(self, pair: PairMapping) -> None:
        """Add a pair. Overlapping component ranges are resolved at query time."""
        order = len(self._pairs)
        self._pairs.append(pair)
        self._insert(order, pair)

    def _insert(self, order: int, pair: PairMapping) -> None:
        tree = self._index.get(pair.component.seq_id)
        if tree is None:
            tree = self._index[pair.component.seq_id] = IntervalTree()
        # IntervalTree keys are half-open
        tree.addi(pair.component.start, pair.component.end + 1, (order, pair))

    def count(self) -> int:
        """Number of pairs held."""
        return len(self._pairs)

    def __len__(self):
        return len(self._pairs)

    @property
    def pairs(self) -> List[PairMapping]:
        return list(self._pairs)

    def components(self) -> List[str]:
        """Component sequence ids of all pairs, in insertion order."""
        return [pair.component.seq_id for pair in self._pairs]

    def sequences(self) -> List[str]:
        """Distinct component sequence names."""
        return list(self._index.keys())

    def swap(self) -> 'MappingCollection':
        """Reverse the mapping direction of every pair in place."""
        self._pairs = [pair.swapped() for pair in self._pairs]
        self._index = {}
        for order, pair in enumerate(self._pairs):
            self._insert(order, pair)
        logging.debug(f"Swapped mapping direction of {len(self._pairs)} pairs")
        return self

    def map(self, query: Interval) -> List[Segment]:
        """
        Split a query into Gap and Match segments in query order.

        Returns a single Gap when nothing on the query's sequence overlaps it
        and a single Match when one pair contains it. Anything else yields two
        or more segments whose union is exactly the query. Where component
        ranges overlap, the most recently added pair wins.
        """
        tree = self._index.get(query.seq_id)
        if tree is None:
            return [Gap(query)]

        hits = tree.overlap(query.start, query.end + 1)
        if not hits:
            return [Gap(query)]

        entries: List[Tuple[int, PairMapping]] = sorted(hit.data for hit in hits)

        if len(entries) == 1 and entries[0][1].component.contains(query):
            pair = entries[0][1]
            return [Match(query, pair.transform(query))]

        return self._split(query, entries)

    def _split(self, query: Interval,
               entries: List[Tuple[int, PairMapping]]) -> List[Segment]:
        """Partition the query at every clipped pair boundary."""
        points = {query.start, query.end + 1}
        for _, pair in entries:
            points.add(max(pair.component.start, query.start))
            points.add(min(pair.component.end, query.end) + 1)
        points = sorted(points)

        segments: List[Segment] = []
        run_start = query.start
        run_owner = self._owner(entries, points[0], points[1])

        for lo, hi in zip(points[1:], points[2:]):
            owner = self._owner(entries, lo, hi)
            if owner is not run_owner:
                segments.append(self._segment(query, run_start, lo - 1, run_owner))
                run_start, run_owner = lo, owner

        segments.append(self._segment(query, run_start, query.end, run_owner))
        return segments

    @staticmethod
    def _owner(entries: List[Tuple[int, PairMapping]], lo: int, hi: int) -> Optional[PairMapping]:
        """Last added pair covering the half-open range [lo, hi)."""
        owner = None
        for _, pair in entries:
            if pair.component.start <= lo and hi - 1 <= pair.component.end:
                owner = pair
        return owner

    @staticmethod
    def _segment(query: Interval, start: int, end: int,
                 owner: Optional[PairMapping]) -> Segment:
        sub = query.sub_range(start, end)
        if owner is None:
            return Gap(sub)
        return Match(sub, owner.transform(sub))
