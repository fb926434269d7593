#!/usr/bin/env python3

"""
Unit tests for configuration management.

Tests the configuration loading, validation, and environment
variable handling functionality.
"""

import unittest
import tempfile
import os
import json
import sys
from unittest import mock

# Add the parent directory to the path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from gff_remap.core.config import RemapConfig, load_config
from gff_remap.core.exceptions import ConfigurationError


class TestRemapConfig(unittest.TestCase):
    """Test RemapConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = RemapConfig()

        self.assertEqual(config.mapping_format, "auto")
        self.assertIsNone(config.feature_type)
        self.assertFalse(config.swap_direction)
        self.assertFalse(config.pass_through_unmapped)
        self.assertFalse(config.verbose)
        self.assertTrue(config.report_failed_ids)
        self.assertEqual(config.memory_limit_mb, 4096)
        self.assertEqual(config.batch_size, 10000)
        self.assertFalse(config.debug_mode)

    def test_config_validation(self):
        """Test configuration validation."""
        RemapConfig().validate()

        with self.assertRaises(ConfigurationError):
            RemapConfig(mapping_format="bed")

        with self.assertRaises(ConfigurationError):
            RemapConfig(feature_type="")

        with self.assertRaises(ConfigurationError):
            RemapConfig(memory_limit_mb=50)

        with self.assertRaises(ConfigurationError):
            RemapConfig(batch_size=0)

    def test_config_from_dict(self):
        """Unknown keys are ignored, unspecified keys keep defaults."""
        config = RemapConfig.from_dict({
            "mapping_format": "agp",
            "pass_through_unmapped": True,
            "unknown_key": "ignored"
        })

        self.assertEqual(config.mapping_format, "agp")
        self.assertTrue(config.pass_through_unmapped)
        self.assertEqual(config.batch_size, 10000)

    def test_config_to_dict(self):
        config = RemapConfig(feature_type="contig", swap_direction=True)
        config_dict = config.to_dict()

        self.assertEqual(config_dict["feature_type"], "contig")
        self.assertTrue(config_dict["swap_direction"])
        self.assertIn("batch_size", config_dict)

    def test_config_from_json_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"feature_type": "scaffold", "verbose": True}, f)
            config_path = f.name

        try:
            config = RemapConfig.from_file(config_path)
            self.assertEqual(config.feature_type, "scaffold")
            self.assertTrue(config.verbose)
        finally:
            os.unlink(config_path)

    def test_config_from_yaml_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("mapping_format: gff\nswap_direction: true\nbatch_size: 50\n")
            config_path = f.name

        try:
            config = RemapConfig.from_file(config_path)
            self.assertEqual(config.mapping_format, "gff")
            self.assertTrue(config.swap_direction)
            self.assertEqual(config.batch_size, 50)
        finally:
            os.unlink(config_path)

    def test_config_from_nonexistent_file(self):
        with self.assertRaises(ConfigurationError):
            RemapConfig.from_file("/nonexistent/config.json")

    def test_config_from_invalid_json(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write("{ invalid json }")
            config_path = f.name

        try:
            with self.assertRaises(ConfigurationError):
                RemapConfig.from_file(config_path)
        finally:
            os.unlink(config_path)

    def test_config_save_to_file(self):
        config = RemapConfig(feature_type="contig", pass_through_unmapped=True)

        for suffix in ('.json', '.yml'):
            with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
                config_path = f.name
            try:
                config.save_to_file(config_path)
                loaded = RemapConfig.from_file(config_path)
                self.assertEqual(loaded, config)
            finally:
                os.unlink(config_path)

    def test_config_from_env(self):
        env = {
            'GFF_REMAP_FEATURE_TYPE': 'contig',
            'GFF_REMAP_PASS_THROUGH_UNMAPPED': 'yes',
            'GFF_REMAP_BATCH_SIZE': '25',
        }
        with mock.patch.dict(os.environ, env):
            config = RemapConfig.from_env()

        self.assertEqual(config.feature_type, 'contig')
        self.assertTrue(config.pass_through_unmapped)
        self.assertEqual(config.batch_size, 25)

    def test_config_from_invalid_env(self):
        with mock.patch.dict(os.environ, {'GFF_REMAP_BATCH_SIZE': 'many'}):
            with self.assertRaises(ConfigurationError):
                RemapConfig.from_env()


class TestLoadConfig(unittest.TestCase):
    """Test load_config priority handling."""

    def test_defaults(self):
        config = load_config(use_env=False)
        self.assertEqual(config, RemapConfig())

    def test_env_then_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"mapping_format": "agp"}, f)
            config_path = f.name

        try:
            with mock.patch.dict(os.environ, {'GFF_REMAP_MAPPING_FORMAT': 'gff'}):
                self.assertEqual(load_config().mapping_format, 'gff')
                self.assertEqual(load_config(config_path).mapping_format, 'agp')
        finally:
            os.unlink(config_path)

    def test_env_value_survives_file_without_key(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"batch_size": 50}, f)
            config_path = f.name

        try:
            with mock.patch.dict(os.environ, {'GFF_REMAP_PASS_THROUGH_UNMAPPED': 'true'}):
                config = load_config(config_path)
            self.assertTrue(config.pass_through_unmapped)
            self.assertEqual(config.batch_size, 50)
        finally:
            os.unlink(config_path)

    def test_file_values_are_validated(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("batch_size: 0\n")
            config_path = f.name

        try:
            with self.assertRaises(ConfigurationError):
                load_config(config_path, use_env=False)
        finally:
            os.unlink(config_path)


if __name__ == '__main__':
    unittest.main()
