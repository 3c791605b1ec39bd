"""VersionParser protocol.

Both the Gemfile and .ruby-version parsers conform to this interface, so the
detector can be driven by fakes in tests without touching real grammars.

Error contract:
  FileNotFoundError: the file is absent. Propagated unchanged so callers
    can branch on the exception type.
  VersionParseError: any other read or decode failure.
"""

from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class VersionParser(Protocol):
    """Protocol for Ruby version parsers."""

    def parse_version(self, path: Union[str, Path]) -> str:
        """Return the Ruby version constraint declared in the file at path.

        An empty string means the file expresses no constraint.

        Raises:
            FileNotFoundError: The file does not exist.
            VersionParseError: The file exists but could not be read.
        """
        ...  # noqa: PLR6301


class VersionParseError(Exception):
    """Raised when a version file exists but cannot be read or decoded.

    Carries the path and original error for upstream logging.
    """

    def __init__(self, path: Union[str, Path], cause: Optional[Exception] = None):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"failed to parse {self.path}: {cause}")


def read_version_file(path: Union[str, Path]) -> str:
    """Read a version file as UTF-8 text, dropping a leading byte-order mark.

    FileNotFoundError passes through; every other OSError and decoding
    failure is wrapped in VersionParseError.
    """
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise VersionParseError(path, exc) from exc
