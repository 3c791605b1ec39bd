"""Detector orchestrator: decides whether Bundler should build the app.

Detection flow:
1. Parse <working_dir>/Gemfile. Absent → fail; any other error → raise.
2. If the Gemfile pins no Ruby version, fall back to .ruby-version.
   Fallback errors are downgraded to a single warning.
3. Build the plan: provide "gems"; require "bundler", "gems", "mri".

.ruby-version is resolved against the process working directory, not the
app working directory, unless ruby_version_in_working_dir is set.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from bundle_install.detector.parser import VersionParser
from bundle_install.detector.ruby import GemfileParser, RubyVersionFileParser
from bundle_install.detector.ruby.defaults import (
    BUNDLER_DEPENDENCY,
    GEMFILE,
    GEMS_DEPENDENCY,
    MRI_DEPENDENCY,
    RUBY_VERSION_FILE,
)
from bundle_install.detector.types import (
    BuildPlanMetadata,
    DetectContext,
    DetectResult,
    Plan,
    Provision,
    Requirement,
)

logger = logging.getLogger(__name__)

GEMFILE_MISSING_REASON = f"{GEMFILE} is not present"

RUBY_VERSION_WARNING = (
    f"WARNING: Could not parse the {RUBY_VERSION_FILE} file, "
    "as a result no Ruby version has been specified"
)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def detect(
    context: DetectContext,
    gemfile_parser: Optional[VersionParser] = None,
    ruby_version_parser: Optional[VersionParser] = None,
    log: Optional[Any] = None,
    *,
    ruby_version_in_working_dir: bool = False,
) -> DetectResult:
    """Run Ruby/Bundler detection for the app in context.working_dir.

    Args:
        context: Detect inputs; only working_dir is consulted.
        gemfile_parser: Parser for the Gemfile. Defaults to GemfileParser.
        ruby_version_parser: Parser for .ruby-version. Defaults to
            RubyVersionFileParser.
        log: Sink for the fallback warning. Anything with a .warning(str)
            method; defaults to this module's logger.
        ruby_version_in_working_dir: Look for .ruby-version inside
            working_dir instead of the process working directory.

    Returns:
        A passing DetectResult with the build plan, or a failing one when
        the Gemfile is absent.

    Raises:
        VersionParseError: The Gemfile exists but could not be read.
    """
    if gemfile_parser is None:
        gemfile_parser = GemfileParser()
    if ruby_version_parser is None:
        ruby_version_parser = RubyVersionFileParser()
    if log is None:
        log = logger

    working_dir = Path(context.working_dir)

    try:
        mri_version = gemfile_parser.parse_version(working_dir / GEMFILE)
    except FileNotFoundError:
        return DetectResult.fail(GEMFILE_MISSING_REASON)

    version_source: Optional[str] = None
    if mri_version:
        version_source = GEMFILE
    else:
        ruby_version_path = (
            working_dir / RUBY_VERSION_FILE
            if ruby_version_in_working_dir
            else Path(RUBY_VERSION_FILE)
        )
        mri_version, version_source = _fallback_version(
            ruby_version_parser, ruby_version_path, log
        )

    return DetectResult.success(_build_plan(mri_version, version_source))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fallback_version(
    parser: VersionParser,
    path: Path,
    log: Any,
) -> tuple[str, Optional[str]]:
    """Read .ruby-version, returning (version, source) or ("", None)."""
    try:
        version = parser.parse_version(path)
    except Exception:
        log.warning(RUBY_VERSION_WARNING)
        return "", None

    if not version:
        return "", None
    return version, RUBY_VERSION_FILE


def _build_plan(mri_version: str, version_source: Optional[str]) -> Plan:
    return Plan(
        provides=(Provision(name=GEMS_DEPENDENCY),),
        requires=(
            Requirement(
                name=BUNDLER_DEPENDENCY,
                metadata=BuildPlanMetadata(build=True, launch=True),
            ),
            Requirement(
                name=GEMS_DEPENDENCY,
                metadata=BuildPlanMetadata(launch=True),
            ),
            Requirement(
                name=MRI_DEPENDENCY,
                metadata=BuildPlanMetadata(
                    version=mri_version,
                    version_source=version_source,
                    build=True,
                    launch=True,
                ),
            ),
        ),
    )
