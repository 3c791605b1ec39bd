"""Detector module for Ruby/Bundler apps.

Public API:
    detect(context, gemfile_parser, ruby_version_parser, log) -> DetectResult
"""

from bundle_install.detector.orchestrator import detect
from bundle_install.detector.parser import VersionParseError, VersionParser
from bundle_install.detector.types import (
    BuildPlanMetadata,
    DetectContext,
    DetectResult,
    Plan,
    Provision,
    Requirement,
)

__all__ = [
    "detect",
    "BuildPlanMetadata",
    "DetectContext",
    "DetectResult",
    "Plan",
    "Provision",
    "Requirement",
    "VersionParseError",
    "VersionParser",
]
