#!/usr/bin/env python3

"""
File parsers for GFF3 features and AGP assembly descriptions.

Both readers stream rows one at a time with O(n) complexity. Rows that
cannot be parsed raise RecordParseError; callers decide whether that is
fatal.
"""

import logging
import re
import sys
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, TextIO
from urllib.parse import unquote

from .data_structures import Feature
from .exceptions import RecordParseError

# Characters with a reserved meaning in GFF3 columns, plus control characters
_RESERVED = re.compile(r"[;=&,%\x00-\x1f\x7f]")


@dataclass(frozen=True)
class AgpRecord:
    """One row of an AGP file."""
    object_id: str
    object_start: int
    object_end: int
    part_number: int
    component_type: str
    component_id: str
    component_start: int
    component_end: int
    orientation: str

    @property
    def is_component(self) -> bool:
        """True for sequence placements, False for gaps."""
        return self.component_type == 'W'


@contextmanager
def open_text(path: str, mode: str = 'r'):
    """Open a path for text I/O, treating '-' as stdin/stdout."""
    if path == '-':
        yield sys.stdin if 'r' in mode else sys.stdout
    else:
        with open(path, mode) as handle:
            yield handle


class GFF3Parser:
    """Parse GFF3 feature rows from a text stream."""

    def __init__(self, filename: str = ""):
        self.filename = filename

    def iter_features(self, handle: TextIO) -> Iterator[Feature]:
        """Yield features in file order, stopping at a ##FASTA section."""
        for line_num, line in enumerate(handle, 1):
            line = line.rstrip('\r\n')
            if line.startswith('##FASTA'):
                break
            if not line.strip() or line.startswith('#'):
                continue
            yield self.parse_line(line, line_num)

    def parse_line(self, line: str, line_num: int = 0) -> Feature:
        """Parse one GFF3 feature row."""
        parts = line.split('\t')
        if len(parts) != 9:
            raise RecordParseError(
                f"Expected 9 tab-separated columns, found {len(parts)}",
                self.filename, line_num
            )

        seq_id, source, feature_type, start, end, score, strand, phase, attributes = parts
        try:
            start, end = int(start), int(end)
        except ValueError:
            raise RecordParseError(f"Invalid coordinates: {start}-{end}", self.filename, line_num)

        if start > end:
            raise RecordParseError(f"Start {start} is after end {end}", self.filename, line_num)

        return Feature(
            seq_id=unquote(seq_id),
            source=source,
            type=feature_type,
            start=start,
            end=end,
            score=score,
            strand=strand,
            phase=phase,
            attributes=self.parse_attributes(attributes),
        )

    @staticmethod
    def parse_attributes(attr_string: str) -> Dict[str, List[str]]:
        """Parse GFF3 attributes into key -> list of values."""
        attributes = OrderedDict()
        if attr_string in ('', '.'):
            return attributes

        for attr in attr_string.split(';'):
            attr = attr.strip()
            if not attr or '=' not in attr:
                continue
            key, value = attr.split('=', 1)
            attributes[unquote(key)] = [unquote(v) for v in value.split(',')]
        return attributes


class GFF3Writer:
    """Serialize features back to GFF3."""

    def __init__(self, handle: TextIO):
        self.handle = handle
        self.written = 0

    def write_header(self) -> None:
        self.handle.write("##gff-version 3\n")

    def write(self, feature: Feature) -> None:
        self.handle.write(self.format_feature(feature) + "\n")
        self.written += 1

    @staticmethod
    def format_feature(feature: Feature) -> str:
        """Format a feature as a single GFF3 row."""
        return "\t".join([
            _escape(feature.seq_id),
            feature.source,
            feature.type,
            str(feature.start),
            str(feature.end),
            feature.score,
            feature.strand,
            feature.phase,
            GFF3Writer.format_attributes(feature.attributes),
        ])

    @staticmethod
    def format_attributes(attributes: Dict[str, List[str]]) -> str:
        if not attributes:
            return "."
        return ";".join(
            f"{_escape(key)}={','.join(_escape(v) for v in values)}"
            for key, values in attributes.items()
        )


def _escape(value: str) -> str:
    return _RESERVED.sub(lambda m: f"%{ord(m.group()):02X}", value)


class AGPParser:
    """Parse AGP assembly description rows."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self.skipped = 0

    def iter_records(self) -> Iterator[AgpRecord]:
        """Yield well formed AGP rows; malformed rows are logged and skipped."""
        with open(self.file_path, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.rstrip('\r\n')
                if not line.strip() or line.startswith('#'):
                    continue

                try:
                    yield self.parse_line(line, line_num)
                except RecordParseError as e:
                    self.skipped += 1
                    logging.warning(str(e))

    def parse_line(self, line: str, line_num: int = 0) -> AgpRecord:
        """Parse one AGP row."""
        parts = line.split('\t')
        if len(parts) < 8:
            raise RecordParseError(
                f"Expected at least 8 tab-separated columns, found {len(parts)}",
                self.file_path, line_num
            )

        component_type = parts[4]
        if component_type != 'W':
            # Gap rows carry length and gap type in place of component coordinates
            return AgpRecord(
                object_id=parts[0],
                object_start=self._int(parts[1], line_num),
                object_end=self._int(parts[2], line_num),
                part_number=self._int(parts[3], line_num),
                component_type=component_type,
                component_id="",
                component_start=0,
                component_end=0,
                orientation="",
            )

        orientation = parts[8] if len(parts) > 8 else '+'
        if orientation not in ('+', '-'):
            orientation = '+'

        return AgpRecord(
            object_id=parts[0],
            object_start=self._int(parts[1], line_num),
            object_end=self._int(parts[2], line_num),
            part_number=self._int(parts[3], line_num),
            component_type=component_type,
            component_id=parts[5],
            component_start=self._int(parts[6], line_num),
            component_end=self._int(parts[7], line_num),
            orientation=orientation,
        )

    def _int(self, value: str, line_num: int) -> int:
        try:
            return int(value)
        except ValueError:
            raise RecordParseError(f"Invalid integer field: {value!r}", self.file_path, line_num)
