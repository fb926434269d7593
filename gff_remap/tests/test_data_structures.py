#!/usr/bin/env python3

"""
Unit tests for core data structures.

Tests strands, intervals, pair transforms and GFF3 feature records.
"""

import unittest
import sys
import os

# Add the parent directory to the path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from gff_remap.core.data_structures import Strand, Interval, PairMapping, Feature


class TestStrand(unittest.TestCase):
    """Test strand symbols and orientation composition."""

    def test_from_symbol(self):
        self.assertIs(Strand.from_symbol('+'), Strand.FORWARD)
        self.assertIs(Strand.from_symbol('-'), Strand.REVERSE)
        self.assertIs(Strand.from_symbol('.'), Strand.UNKNOWN)
        self.assertIs(Strand.from_symbol('?'), Strand.UNKNOWN)

    def test_symbol(self):
        self.assertEqual(Strand.FORWARD.symbol, '+')
        self.assertEqual(Strand.REVERSE.symbol, '-')
        self.assertEqual(Strand.UNKNOWN.symbol, '.')

    def test_combine(self):
        """Same orientation stays forward, one reverse flips."""
        self.assertIs(Strand.FORWARD.combine(Strand.FORWARD), Strand.FORWARD)
        self.assertIs(Strand.REVERSE.combine(Strand.REVERSE), Strand.FORWARD)
        self.assertIs(Strand.FORWARD.combine(Strand.REVERSE), Strand.REVERSE)
        self.assertIs(Strand.REVERSE.combine(Strand.FORWARD), Strand.REVERSE)

    def test_combine_unknown(self):
        for strand in Strand:
            self.assertIs(Strand.UNKNOWN.combine(strand), Strand.UNKNOWN)
            self.assertIs(strand.combine(Strand.UNKNOWN), Strand.UNKNOWN)


class TestInterval(unittest.TestCase):
    """Test the Interval data structure."""

    def test_length(self):
        self.assertEqual(Interval("chr1", 100, 200).length, 101)
        self.assertEqual(Interval("chr1", 5, 5).length, 1)

    def test_invalid_coordinates(self):
        with self.assertRaises(ValueError):
            Interval("chr1", 200, 100)

    def test_invalid_strand(self):
        with self.assertRaises(ValueError):
            Interval("chr1", 1, 10, '+')

    def test_immutable(self):
        interval = Interval("chr1", 1, 10)
        with self.assertRaises(AttributeError):
            interval.start = 5

    def test_overlaps(self):
        a = Interval("chr1", 100, 200)
        self.assertTrue(a.overlaps(Interval("chr1", 200, 300)))
        self.assertFalse(a.overlaps(Interval("chr1", 201, 300)))
        self.assertFalse(a.overlaps(Interval("chr2", 100, 200)))

    def test_contains_inclusive_boundaries(self):
        a = Interval("chr1", 100, 200)
        self.assertTrue(a.contains(Interval("chr1", 100, 200)))
        self.assertTrue(a.contains(Interval("chr1", 150, 160)))
        self.assertFalse(a.contains(Interval("chr1", 99, 150)))
        self.assertFalse(a.contains(Interval("chr1", 150, 201)))


class TestPairMapping(unittest.TestCase):
    """Test the linear transform of a pair."""

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            PairMapping(Interval("ctg", 1, 100), Interval("chr1", 1, 99))

    def test_forward_transform(self):
        pair = PairMapping(Interval("ctg", 1, 1001), Interval("chr1", 1001, 2001))
        mapped = pair.transform(Interval("ctg", 401, 901, Strand.FORWARD))
        self.assertEqual(mapped, Interval("chr1", 1401, 1901, Strand.FORWARD))

    def test_reverse_transform(self):
        """Contig range maps onto the high end of a reversed placement."""
        pair = PairMapping(
            Interval("S", 1, 1001, Strand.FORWARD),
            Interval("T", 3001, 4001, Strand.REVERSE)
        )
        mapped = pair.transform(Interval("S", 1, 501, Strand.FORWARD))
        self.assertEqual(mapped.seq_id, "T")
        self.assertEqual((mapped.start, mapped.end), (3501, 4001))
        self.assertIs(mapped.strand, Strand.REVERSE)
        self.assertEqual(mapped.length, 501)

    def test_reverse_transform_flips_reverse_query(self):
        pair = PairMapping(
            Interval("S", 1, 1001, Strand.FORWARD),
            Interval("T", 3001, 4001, Strand.REVERSE)
        )
        mapped = pair.transform(Interval("S", 10, 20, Strand.REVERSE))
        self.assertEqual((mapped.start, mapped.end), (3982, 3992))
        self.assertIs(mapped.strand, Strand.FORWARD)

    def test_unknown_pair_orientation(self):
        pair = PairMapping(
            Interval("S", 1, 100, Strand.UNKNOWN),
            Interval("T", 201, 300, Strand.FORWARD)
        )
        mapped = pair.transform(Interval("S", 11, 20, Strand.FORWARD))
        self.assertEqual((mapped.start, mapped.end), (211, 220))
        self.assertIs(mapped.strand, Strand.UNKNOWN)

    def test_transform_outside_component(self):
        pair = PairMapping(Interval("S", 1, 100), Interval("T", 1, 100))
        with self.assertRaises(ValueError):
            pair.transform(Interval("S", 90, 110))

    def test_swapped_round_trip(self):
        """Mapping through a pair and its inverse returns the query."""
        for orientation in (Strand.FORWARD, Strand.REVERSE):
            pair = PairMapping(
                Interval("S", 11, 510, Strand.FORWARD),
                Interval("T", 2001, 2500, orientation)
            )
            inverse = pair.swapped()
            self.assertIs(inverse.strand, pair.strand)

            for query in (Interval("S", 11, 510, Strand.FORWARD),
                          Interval("S", 50, 77, Strand.REVERSE),
                          Interval("S", 300, 300, Strand.UNKNOWN)):
                back = inverse.transform(pair.transform(query))
                self.assertEqual(back, query)


class TestFeature(unittest.TestCase):
    """Test the Feature record."""

    def _feature(self, **attributes):
        return Feature("ctg1", "test", "mRNA", 100, 200, strand="+", attributes=attributes)

    def test_identity_attributes(self):
        feature = self._feature(ID=["t1"], Name=["alpha"], Parent=["g1", "g2"])
        self.assertEqual(feature.feature_id, "t1")
        self.assertEqual(feature.name, "alpha")
        self.assertEqual(feature.parents, ["g1", "g2"])
        self.assertEqual(feature.label(), "t1 (alpha)")

    def test_missing_attributes(self):
        feature = self._feature()
        self.assertIsNone(feature.feature_id)
        self.assertIsNone(feature.name)
        self.assertEqual(feature.parents, [])
        self.assertEqual(feature.label(), "-")

    def test_original_seq_id_defaults(self):
        feature = self._feature()
        self.assertEqual(feature.original_seq_id, "ctg1")

    def test_relocate(self):
        feature = self._feature(ID=["t1"])
        feature.relocate(Interval("chr1", 1100, 1200, Strand.REVERSE))
        self.assertEqual((feature.seq_id, feature.start, feature.end, feature.strand),
                         ("chr1", 1100, 1200, "-"))
        self.assertEqual(feature.original_seq_id, "ctg1")

    def test_set_parents(self):
        feature = self._feature(Parent=["g1", "g2"])
        feature.set_parents(["g2"])
        self.assertEqual(feature.parents, ["g2"])
        feature.set_parents([])
        self.assertNotIn("Parent", feature.attributes)

    def test_invalid_coordinates(self):
        with self.assertRaises(ValueError):
            Feature("ctg1", "test", "gene", 200, 100)


if __name__ == '__main__':
    unittest.main()
