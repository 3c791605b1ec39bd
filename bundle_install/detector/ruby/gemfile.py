"""Gemfile parser for the Ruby version constraint.

Parses Gemfile line by line, no Ruby evaluation. Finds the first `ruby`
directive and returns its literal version constraint(s):

    ruby '3.2.1'                      -> "3.2.1"
    ruby "~> 3.1"                     -> "~> 3.1"
    ruby(">= 3.0", "< 3.3")           -> ">= 3.0, < 3.3"
    ruby '3.2.1', engine: 'jruby'     -> "3.2.1"
    ruby file: '.ruby-version'        -> ""
    ruby RUBY_VERSION                 -> ""
    ruby(
      "3.2.1"
    )                                 -> "3.2.1"

Handles both quoting styles. Ignores comment lines, keyword options and
trailing comments.
"""

import logging
import re
from pathlib import Path
from typing import Union

from bundle_install.detector.parser import read_version_file

logger = logging.getLogger(__name__)

# Matches the ruby directive itself: `ruby 'x'` or `ruby('x')`
_RUBY_DIRECTIVE_RE = re.compile(r"^ruby(?:\s+|\s*\(\s*)(?P<args>.*)$")

# Matches one positional string literal, optionally followed by a comma
_STRING_ARG_RE = re.compile(r"""\s*(['"])(?P<value>[^'"]*)\1\s*(?P<comma>,)?""")


class GemfileParser:
    """Extracts the Ruby version constraint declared in a Gemfile."""

    def parse_version(self, path: Union[str, Path]) -> str:
        text = read_version_file(path)

        lines = text.splitlines()
        for index, line in enumerate(lines):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            match = _RUBY_DIRECTIVE_RE.match(stripped)
            if match:
                args = _join_continuation(match.group("args"), lines[index + 1:])
                version = _parse_constraints(args)
                logger.debug("Gemfile ruby directive %r -> %r", stripped, version)
                return version
        return ""


def _join_continuation(args: str, following: list[str]) -> str:
    """Append the lines a directive continues onto.

    A directive continues while its arguments are empty (`ruby(` alone on a
    line) or end with a comma.
    """
    for line in following:
        if args.strip() and not args.rstrip().endswith(","):
            break
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        args = f"{args} {stripped}"
    return args


def _parse_constraints(args: str) -> str:
    """Collect the leading positional string arguments of a ruby directive.

    Stops at the first argument that is not a string literal (keyword
    options, constants, the closing paren or a comment).
    """
    constraints: list[str] = []
    pos = 0
    while True:
        match = _STRING_ARG_RE.match(args, pos)
        if not match:
            break
        value = match.group("value").strip()
        if value:
            constraints.append(value)
        pos = match.end()
        if not match.group("comma"):
            break
    return ", ".join(constraints)
