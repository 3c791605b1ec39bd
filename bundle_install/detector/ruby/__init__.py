"""Ruby version parsers.

Entry points:
    GemfileParser().parse_version(path) -> str
    RubyVersionFileParser().parse_version(path) -> str
"""

from bundle_install.detector.ruby.gemfile import GemfileParser
from bundle_install.detector.ruby.ruby_version import RubyVersionFileParser

__all__ = ["GemfileParser", "RubyVersionFileParser"]
