"""Parser for .ruby-version pin files.

The first non-blank, non-comment line is the version. rbenv/rvm style
`ruby-` prefixes are stripped. Content that does not look like a version
yields "" rather than an error.
"""

import logging
import re
from pathlib import Path
from typing import Union

from bundle_install.detector.parser import read_version_file

logger = logging.getLogger(__name__)

# 3.2, 3.2.1, 3.3.0-preview1, 2.7.1-p83
_VERSION_RE = re.compile(r"\d+(?:\.\d+){1,2}(?:-?[0-9A-Za-z]+)?")

_PREFIX = "ruby-"


class RubyVersionFileParser:
    """Reads the pinned Ruby version from a .ruby-version file."""

    def parse_version(self, path: Union[str, Path]) -> str:
        text = read_version_file(path)

        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if stripped.startswith(_PREFIX):
                stripped = stripped[len(_PREFIX):]
            if _VERSION_RE.fullmatch(stripped):
                return stripped
            logger.debug("Ignoring malformed .ruby-version content: %r", stripped)
            return ""
        return ""
