# svg2png/utils/config.py
"""
Configuration loading utility for the svg2png icon renderer.

Provides functions to load settings from YAML files, merge them with
command-line arguments and freeze the result into the ResolvedConfiguration
shared by every conversion of a run.
"""

import logging
import math
import os
from argparse import Namespace  # Used for type hinting
from dataclasses import dataclass, field
from typing import Optional, Tuple

import yaml

from svg2png.config import (
    DEFAULT_EXPECTED_WIDTH,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_ZOOM,
    OUTPUT_FORMATS,
)
from svg2png.sizing.categories import SIZE_CATEGORIES, CategoryTarget
from svg2png.utils.error_handling import ConfigError

logger = logging.getLogger(__name__)

# Keys understood in a YAML configuration file
CONFIG_KEYS = ("zoom", "format", "expected_width", "sizes", "jobs", "log_level", "log_file")


@dataclass(frozen=True)
class ResolvedConfiguration:
    """
    Immutable options for one run, validated on construction.

    Attributes:
        zoom: Uniform scale factor, must be > 0.
        targets: Optional explicit target size per icon category (7 positive ints).
        expected_width: Expected display width in pixels, 0 disables launcher scaling.
        output_format: One of 'grayscale', 'rgb' or 'rgba'.
    """
    zoom: float = DEFAULT_ZOOM
    targets: Optional[Tuple[int, ...]] = None
    expected_width: int = DEFAULT_EXPECTED_WIDTH
    output_format: str = DEFAULT_OUTPUT_FORMAT
    category_targets: Optional[Tuple[CategoryTarget, ...]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        if isinstance(self.zoom, bool) or not isinstance(self.zoom, (int, float)):
            raise ConfigError(f"Zoom factor must be a number, got {self.zoom!r}.")
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise ConfigError(f"Zoom factor must be greater than 0, got {self.zoom}.")
        object.__setattr__(self, "zoom", float(self.zoom))

        if isinstance(self.expected_width, bool) or not isinstance(self.expected_width, int):
            raise ConfigError(f"Expected width must be an integer, got {self.expected_width!r}.")
        if self.expected_width < 0:
            raise ConfigError(f"Expected width must not be negative, got {self.expected_width}.")

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output format '{self.output_format}'. "
                f"Use one of: {', '.join(OUTPUT_FORMATS)}."
            )

        if self.targets is not None:
            targets = tuple(self.targets)
            object.__setattr__(self, "targets", targets)
            object.__setattr__(self, "category_targets", SIZE_CATEGORIES.with_targets(targets))

    @property
    def image_mode(self) -> str:
        """Pillow image mode of the encoded output."""
        return OUTPUT_FORMATS[self.output_format]


def load_config(config_path: str) -> dict:
    """
    Loads configuration settings from a YAML file.

    Args:
        config_path (str): The full path to the YAML configuration file.

    Returns:
        dict: The configuration settings. Empty if the file does not exist or is empty.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """
    if not os.path.exists(config_path):
        logger.warning(f"Configuration file not found at: {config_path}. Proceeding without it.")
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration file {config_path}: {e}")
        raise ConfigError(f"Invalid YAML format in {config_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading configuration file {config_path}: {e}")
        raise ConfigError(f"Could not read file {config_path}: {e}") from e

    if config_data is None:  # Empty YAML file
        logger.warning(f"Configuration file {config_path} is empty.")
        return {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping.")

    unknown = sorted(set(config_data) - set(CONFIG_KEYS))
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys in {config_path}: {', '.join(unknown)}")

    logger.info(f"Successfully loaded configuration from: {config_path}")
    return {key: value for key, value in config_data.items() if key in CONFIG_KEYS}


def get_config_value(key: str, args: Namespace, config: dict, default=None):
    """
    Retrieves a configuration value based on priority: CLI args > config file > default.

    Args:
        key (str): The configuration key to retrieve (e.g., 'zoom').
        args (argparse.Namespace): Parsed command-line arguments.
        config (dict): The dictionary loaded from the configuration file.
        default (any, optional): Value used when neither source provides the key.

    Returns:
        any: The retrieved configuration value.
    """
    # Options left unset on the command line are None
    if hasattr(args, key) and getattr(args, key) is not None:
        return getattr(args, key)
    if key in config and config[key] is not None:
        return config[key]
    return default


def build_configuration(args: Namespace, config: dict) -> ResolvedConfiguration:
    """
    Merges command-line arguments with file settings into a ResolvedConfiguration.

    Raises:
        ConfigError: If a merged value is invalid.
    """
    targets = get_config_value("sizes", args, config)
    if targets is not None:
        if isinstance(targets, (str, bytes)) or not hasattr(targets, "__iter__"):
            raise ConfigError(f"Icon category sizes must be a list, got {targets!r}.")
        targets = tuple(targets)

    return ResolvedConfiguration(
        zoom=get_config_value("zoom", args, config, DEFAULT_ZOOM),
        targets=targets,
        expected_width=get_config_value("expected_width", args, config, DEFAULT_EXPECTED_WIDTH),
        output_format=get_config_value("format", args, config, DEFAULT_OUTPUT_FORMAT),
    )
