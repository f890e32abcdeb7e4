"""Tests for tracking parameters, their validation and configuration loading."""

import os
import math
import shutil
import tempfile
import unittest
import zipfile
import dataclasses

import yaml

from SpotTrackTools.tracking.config_loader import ConfigLoader
from SpotTrackTools.tracking.config_validator import (
    InvalidConfigurationError,
    TrackingConfigValidator,
)
from SpotTrackTools.tracking.parameters import TrackingParameters


class TestTrackingParameters(unittest.TestCase):

    def test_defaults(self):
        params = TrackingParameters()
        self.assertEqual(params.max_distance, 5.0)
        self.assertEqual(params.min_tracked_frames, 3)
        self.assertEqual(params.channel, 0)
        self.assertIsNone(params.color)
        self.assertFalse(params.bridge_gaps)

    def test_frozen(self):
        params = TrackingParameters()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            params.max_distance = 10

    def test_rejects_invalid_values(self):
        invalid = [
            {"max_distance": -1},
            {"max_distance": math.inf},
            {"max_distance": math.nan},
            {"max_distance": "5"},
            {"min_tracked_frames": -1},
            {"min_tracked_frames": 2.5},
            {"min_tracked_frames": True},
        ]
        for kwargs in invalid:
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidConfigurationError):
                    TrackingParameters(**kwargs)

    def test_zero_values_are_valid(self):
        params = TrackingParameters(max_distance=0, min_tracked_frames=0)
        self.assertEqual(params.max_distance, 0)

    def test_invalid_configuration_is_value_error(self):
        with self.assertRaises(ValueError):
            TrackingParameters(max_distance=-0.5)

    def test_from_dict_with_section(self):
        params = TrackingParameters.from_dict(
            {"tracking": {"max_distance": 8, "min_tracked_frames": 1, "color": "red"}}
        )
        self.assertEqual(params, TrackingParameters(8, 1, color="red"))

    def test_from_flat_dict(self):
        params = TrackingParameters.from_dict({"bridge_gaps": True})
        self.assertTrue(params.bridge_gaps)

    def test_micrometer_conversion(self):
        params = TrackingParameters.from_dict(
            {"max_distance": 1.0, "distance_unit": "um", "pixel_size": 0.25}
        )
        self.assertAlmostEqual(params.max_distance, 4.0)

    def test_from_dict_errors(self):
        with self.assertRaisesRegex(InvalidConfigurationError, "Unknown tracking parameters"):
            TrackingParameters.from_dict({"max_jump": 3})
        with self.assertRaises(InvalidConfigurationError):
            TrackingParameters.from_dict({"distance_unit": "nm"})
        with self.assertRaises(InvalidConfigurationError):
            TrackingParameters.from_dict({"distance_unit": "um", "pixel_size": 0})
        with self.assertRaises(InvalidConfigurationError):
            TrackingParameters.from_dict({"max_distance": -1, "distance_unit": "um"})

    def test_to_dict_round_trip(self):
        params = TrackingParameters(max_distance=2.5, channel=2)
        self.assertEqual(TrackingParameters.from_dict(params.to_dict()), params)


class TestTrackingConfigValidator(unittest.TestCase):

    def setUp(self):
        self.validator = TrackingConfigValidator()

    def test_valid(self):
        self.assertTrue(self.validator.validate_max_distance(3))
        self.assertTrue(self.validator.validate_min_tracked_frames(0))
        self.assertTrue(self.validator.validate_units(0.1, "um"))
        self.assertTrue(self.validator.validate_config_keys({"max_distance": 1, "channel": 1}))


class TestConfigLoader(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="test_tracking_config_")
        self.config = {"tracking": {"max_distance": 7.5, "min_tracked_frames": 2}}
        self.yaml_path = os.path.join(self.test_dir, "tracking.yml")
        with open(self.yaml_path, "w") as f:
            yaml.safe_dump(self.config, f)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_yaml(self):
        self.assertEqual(ConfigLoader.load_config(self.yaml_path), self.config)

    def test_load_zip(self):
        zip_path = os.path.join(self.test_dir, "bundle.zip")
        with zipfile.ZipFile(zip_path, "w") as zf:
            zf.writestr("readme.txt", "not a config")
            zf.write(self.yaml_path, arcname="configs/tracking.yaml")
        self.assertEqual(ConfigLoader.load_config(zip_path), self.config)

    def test_zip_without_yaml(self):
        zip_path = os.path.join(self.test_dir, "empty.zip")
        with zipfile.ZipFile(zip_path, "w") as zf:
            zf.writestr("readme.txt", "nothing here")
        with self.assertRaises(FileNotFoundError):
            ConfigLoader.load_config(zip_path)

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            ConfigLoader.load_config(os.path.join(self.test_dir, "tracking.json"))

    def test_nested_override(self):
        config = ConfigLoader.load_config(
            self.yaml_path, override_args={"tracking": {"min_tracked_frames": 0}}
        )
        self.assertEqual(config["tracking"], {"max_distance": 7.5, "min_tracked_frames": 0})

    def test_parameters_from_file(self):
        params = TrackingParameters.from_config_file(self.yaml_path)
        self.assertEqual(params.max_distance, 7.5)
        self.assertEqual(params.min_tracked_frames, 2)


if __name__ == "__main__":
    unittest.main()
