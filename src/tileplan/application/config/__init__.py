"""Configuration loading, validation and conversion."""

from .adapter import (
    config_to_analysis,
    config_to_consumption_options,
    config_to_pattern,
    config_to_pricing,
    config_to_surface,
    resolve_pattern,
)
from .loader import ConfigError, load_config, load_config_from_dict
from .merger import merge_config_with_cli
from .schema import (
    SUPPORTED_VERSIONS,
    AnalysisConfigSchema,
    ExclusionConfigSchema,
    FloorConfigSchema,
    GroutConfigSchema,
    OutputFormat,
    PatternConfigSchema,
    PricingConfigSchema,
    SurfaceConfigSchema,
    TileConfigSchema,
    TilePlanConfiguration,
    WasteConfigSchema,
)
from .validator import ValidationIssue, ValidationResult, validate_config

__all__ = [
    "SUPPORTED_VERSIONS",
    "AnalysisConfigSchema",
    "ConfigError",
    "ExclusionConfigSchema",
    "FloorConfigSchema",
    "GroutConfigSchema",
    "OutputFormat",
    "PatternConfigSchema",
    "PricingConfigSchema",
    "SurfaceConfigSchema",
    "TileConfigSchema",
    "TilePlanConfiguration",
    "ValidationIssue",
    "ValidationResult",
    "WasteConfigSchema",
    "config_to_analysis",
    "config_to_consumption_options",
    "config_to_pattern",
    "config_to_pricing",
    "config_to_surface",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "resolve_pattern",
    "validate_config",
]
