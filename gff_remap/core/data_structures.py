#!/usr/bin/env python3

"""
Core data structures for the GFF coordinate remapper.

Defines strands, intervals, pair mappings between a component and an
assembled interval, the segments produced by a mapping query and the GFF3
feature record that is remapped.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class Strand(Enum):
    """Orientation of an interval on its sequence."""
    FORWARD = 1
    REVERSE = -1
    UNKNOWN = 0

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Strand':
        """Convert a GFF3/AGP strand symbol to a Strand."""
        if symbol == '+':
            return cls.FORWARD
        if symbol == '-':
            return cls.REVERSE
        return cls.UNKNOWN

    @property
    def symbol(self) -> str:
        """GFF3 symbol for this strand."""
        return _STRAND_SYMBOLS[self]

    def combine(self, other: 'Strand') -> 'Strand':
        """Compose two orientations; unknown on either side stays unknown."""
        if self is Strand.UNKNOWN or other is Strand.UNKNOWN:
            return Strand.UNKNOWN
        return Strand(self.value * other.value)


_STRAND_SYMBOLS = {
    Strand.FORWARD: '+',
    Strand.REVERSE: '-',
    Strand.UNKNOWN: '.',
}

_UNKNOWN_SYMBOLS = ('.', '?')


@dataclass(frozen=True)
class Interval:
    """A closed, 1-based range on a named sequence."""
    seq_id: str
    start: int
    end: int
    strand: Strand = Strand.FORWARD

    def __post_init__(self):
        """Validate interval data after initialization."""
        if self.start > self.end:
            raise ValueError(f"Invalid interval coordinates: {self.seq_id}:{self.start}-{self.end}")
        if not isinstance(self.strand, Strand):
            raise ValueError(f"Invalid strand: {self.strand}")

    @property
    def length(self) -> int:
        """Get interval length."""
        return self.end - self.start + 1

    def overlaps(self, other: 'Interval') -> bool:
        """Check if this interval overlaps another on the same sequence."""
        return (self.seq_id == other.seq_id and
                not (self.end < other.start or self.start > other.end))

    def contains(self, other: 'Interval') -> bool:
        """Check if this interval fully contains another on the same sequence."""
        return (self.seq_id == other.seq_id and
                self.start <= other.start and other.end <= self.end)

    def sub_range(self, start: int, end: int) -> 'Interval':
        """Same sequence and strand, new coordinates."""
        return Interval(self.seq_id, start, end, self.strand)

    def __str__(self):
        return f"{self.seq_id}:{self.start}-{self.end}({self.strand.symbol})"


@dataclass(frozen=True)
class PairMapping:
    """
    Linear transform between a component interval and an assembled interval.

    The component range corresponds base for base to the assembled range.
    The effective orientation of the pair is the combination of both sides,
    so swapping the two sides keeps it unchanged.
    """
    component: Interval
    assembled: Interval

    def __post_init__(self):
        """Validate pair data after initialization."""
        if self.component.length != self.assembled.length:
            raise ValueError(
                f"Component {self.component} and assembled {self.assembled} differ in length "
                f"({self.component.length} != {self.assembled.length})"
            )

    @property
    def strand(self) -> Strand:
        """Effective orientation of the pair."""
        return self.component.strand.combine(self.assembled.strand)

    def transform(self, query: Interval) -> Interval:
        """Map a query contained in the component range onto the assembled range."""
        if not self.component.contains(query):
            raise ValueError(f"Query {query} is not contained in component {self.component}")

        off0 = query.start - self.component.start
        off1 = query.end - self.component.start

        if self.strand is Strand.REVERSE:
            start = self.assembled.end - off1
            end = self.assembled.end - off0
        else:
            start = self.assembled.start + off0
            end = self.assembled.start + off1

        return Interval(self.assembled.seq_id, start, end, query.strand.combine(self.strand))

    def swapped(self) -> 'PairMapping':
        """Get the inverse pair, mapping assembled coordinates back to the component."""
        return PairMapping(component=self.assembled, assembled=self.component)


@dataclass(frozen=True)
class Gap:
    """Part of a query with no mapping."""
    query_range: Interval


@dataclass(frozen=True)
class Match:
    """Part of a query that mapped cleanly through one pair."""
    query_range: Interval
    mapped_range: Interval


Segment = Union[Gap, Match]


class Classification(Enum):
    """Outcome of mapping a single feature."""
    UNMAPPED = "unmapped"
    CLEAN = "clean"
    SPANNING = "spanning"


@dataclass
class Feature:
    """Represents a single GFF3 feature row."""
    seq_id: str
    source: str
    type: str
    start: int
    end: int
    score: str = "."
    strand: str = "."
    phase: str = "."
    attributes: Dict[str, List[str]] = field(default_factory=OrderedDict)
    original_seq_id: str = ""

    def __post_init__(self):
        """Validate feature data after initialization."""
        if self.start > self.end:
            raise ValueError(f"Invalid feature coordinates: {self.start}-{self.end}")
        if not self.original_seq_id:
            self.original_seq_id = self.seq_id

    @property
    def feature_id(self) -> Optional[str]:
        """First ID value, or None."""
        values = self.attributes.get('ID')
        return values[0] if values else None

    @property
    def name(self) -> Optional[str]:
        """First Name value, or None."""
        values = self.attributes.get('Name')
        return values[0] if values else None

    @property
    def parents(self) -> List[str]:
        """All Parent values."""
        return list(self.attributes.get('Parent', []))

    @property
    def length(self) -> int:
        """Get feature length."""
        return self.end - self.start + 1

    @property
    def location(self) -> Interval:
        """The feature's own location as an interval."""
        return Interval(self.seq_id, self.start, self.end, Strand.from_symbol(self.strand))

    def relocate(self, interval: Interval) -> None:
        """Move the feature onto the given interval."""
        self.seq_id = interval.seq_id
        self.start = interval.start
        self.end = interval.end
        # '?' (stranded, strand unknown) and '.' (unstranded) share Strand.UNKNOWN
        if not (interval.strand is Strand.UNKNOWN and self.strand in _UNKNOWN_SYMBOLS):
            self.strand = interval.strand.symbol

    def set_parents(self, parents: List[str]) -> None:
        """Replace the Parent attribute, removing it when empty."""
        if parents:
            self.attributes['Parent'] = list(parents)
        else:
            self.attributes.pop('Parent', None)

    def label(self) -> str:
        """Human readable identifier for reports."""
        feature_id = self.feature_id or "-"
        if self.name:
            return f"{feature_id} ({self.name})"
        return feature_id
