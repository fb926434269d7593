#!/usr/bin/env python3

"""
Test suite for the GFF coordinate remapper.

Unit tests covering:
- Intervals, strands and pair transforms
- Mapping collection queries and direction swapping
- Building mappings from AGP and GFF3 files
- Feature reconciliation and parent orphaning
- Configuration management and the end-to-end pipeline
"""
