"""
Unit Tests for configuration handling and the command-line entry point.

This test suite verifies svg2png.utils.config (validation, YAML loading and
CLI/file precedence) and the exit status of svg2png.render.main.
"""

import argparse
import contextlib
import dataclasses
import io
import os
import sys
import tempfile
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from svg2png.render import main
from svg2png.utils.config import (
    ResolvedConfiguration,
    build_configuration,
    get_config_value,
    load_config,
)
from svg2png.utils.error_handling import ConfigError

TARGETS = (48, 64, 72, 96, 128, 192, 172)


def make_args(**kwargs):
    values = dict(zoom=None, format=None, expected_width=None, sizes=None, jobs=None)
    values.update(kwargs)
    return argparse.Namespace(**values)


class TestResolvedConfiguration(unittest.TestCase):

    def test_defaults(self):
        config = ResolvedConfiguration()
        self.assertEqual(config.zoom, 1.0)
        self.assertIsNone(config.targets)
        self.assertIsNone(config.category_targets)
        self.assertEqual(config.expected_width, 0)
        self.assertEqual(config.output_format, "rgba")
        self.assertEqual(config.image_mode, "RGBA")

    def test_is_immutable(self):
        config = ResolvedConfiguration()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.zoom = 2.0

    def test_targets_are_bound_to_categories(self):
        config = ResolvedConfiguration(targets=list(TARGETS))
        self.assertEqual(config.targets, TARGETS)
        self.assertEqual(config.category_targets[6].category.name, "launcher")

    def test_invalid_values(self):
        for kwargs in (
            dict(zoom=0),
            dict(zoom=-1.5),
            dict(zoom=float("inf")),
            dict(zoom="2"),
            dict(targets=(1, 2, 3)),
            dict(targets=(48, 64, 72, 96, 128, 192, 0)),
            dict(expected_width=-1),
            dict(expected_width=10.5),
            dict(output_format="cmyk"),
        ):
            with self.subTest(**kwargs), self.assertRaises(ConfigError):
                ResolvedConfiguration(**kwargs)

    def test_integer_zoom_is_accepted(self):
        self.assertEqual(ResolvedConfiguration(zoom=2).zoom, 2.0)


class TestConfigFile(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self.temp_dir.name, "svg2png.yaml")

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, text):
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_load_config(self):
        self.write("zoom: 1.5\nformat: rgb\nsizes: [48, 64, 72, 96, 128, 192, 172]\n")
        self.assertEqual(
            load_config(self.config_path),
            {"zoom": 1.5, "format": "rgb", "sizes": list(TARGETS)},
        )

    def test_unknown_keys_are_dropped(self):
        self.write("zoom: 2\ncolour: blue\n")
        with self.assertLogs("svg2png.utils.config", level="WARNING"):
            self.assertEqual(load_config(self.config_path), {"zoom": 2})

    def test_missing_and_empty_files(self):
        with self.assertLogs("svg2png.utils.config", level="WARNING"):
            self.assertEqual(load_config(os.path.join(self.temp_dir.name, "none.yaml")), {})
        self.write("")
        with self.assertLogs("svg2png.utils.config", level="WARNING"):
            self.assertEqual(load_config(self.config_path), {})

    def test_invalid_yaml(self):
        self.write("zoom: [1.5\n")
        with self.assertRaises(ConfigError):
            load_config(self.config_path)
        self.write("- 1\n- 2\n")
        with self.assertRaises(ConfigError):
            load_config(self.config_path)

    def test_command_line_overrides_file(self):
        args = make_args(zoom=3.0)
        file_config = {"zoom": 1.5, "expected_width": 1080}
        self.assertEqual(get_config_value("zoom", args, file_config), 3.0)
        self.assertEqual(get_config_value("expected_width", args, file_config), 1080)
        self.assertEqual(get_config_value("format", args, file_config, "rgba"), "rgba")

    def test_build_configuration(self):
        config = build_configuration(make_args(format="grayscale"), {"zoom": 2, "sizes": list(TARGETS)})
        self.assertEqual(config, ResolvedConfiguration(zoom=2.0, targets=TARGETS, output_format="grayscale"))

        with self.assertRaises(ConfigError):
            build_configuration(make_args(), {"sizes": "48 64"})


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.source_dir = os.path.join(self.temp_dir.name, "svg")
        self.target_dir = os.path.join(self.temp_dir.name, "png")
        os.makedirs(self.source_dir)

    def tearDown(self):
        self.temp_dir.cleanup()

    def run_main(self, *argv):
        with contextlib.redirect_stderr(io.StringIO()):
            return main(["--no_progress", "--log_level", "CRITICAL", *argv])

    def assert_usage_error(self, *argv):
        with self.assertRaises(SystemExit) as cm:
            self.run_main(*argv)
        self.assertEqual(cm.exception.code, 2)

    def test_invalid_arguments(self):
        self.assert_usage_error("-z", "0", self.source_dir, self.target_dir)
        self.assert_usage_error("-z", "abc", self.source_dir, self.target_dir)
        self.assert_usage_error("-f", "cmyk", self.source_dir, self.target_dir)
        self.assert_usage_error("-w", "-5", self.source_dir, self.target_dir)
        self.assert_usage_error("-s", "48", "64", "72", "96", "128", "0", "172", self.source_dir, self.target_dir)
        self.assert_usage_error("-s", "48", "64", "72", "96", "128", "192", self.source_dir, self.target_dir)
        self.assert_usage_error(self.source_dir)
        self.assert_usage_error(self.source_dir, self.target_dir, "extra")

    def test_invalid_config_file(self):
        config_path = os.path.join(self.temp_dir.name, "bad.yaml")
        with open(config_path, "w") as f:
            f.write("zoom: -1\n")
        self.assert_usage_error("--config_file", config_path, self.source_dir, self.target_dir)

    def test_no_sources_exits_zero(self):
        self.assertEqual(self.run_main("-z", "2", self.source_dir, self.target_dir), 0)
        self.assertFalse(os.path.exists(self.target_dir))

    def test_uncreatable_target_exits_nonzero(self):
        with open(os.path.join(self.source_dir, "icon.svg"), "w") as f:
            f.write('<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24"/>')
        with open(self.target_dir, "w") as f:
            f.write("in the way")
        self.assertEqual(self.run_main(self.source_dir, self.target_dir), 1)


if __name__ == "__main__":
    unittest.main()
