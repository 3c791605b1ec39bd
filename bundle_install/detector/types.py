"""Shared types for the detector module.

The detector produces a DetectResult. A passing result carries a Plan
describing what this buildpack provides and requires; a failing result
carries the reason. Hard errors are raised, never returned.

All types are frozen: a plan is built once from the two version lookups and
handed to the caller unchanged.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import tomli_w


@dataclass(frozen=True)
class DetectContext:
    """Inputs supplied by the driver invoking the detect phase."""

    working_dir: Path
    platform_dir: Optional[Path] = None
    plan_path: Optional[Path] = None


@dataclass(frozen=True)
class BuildPlanMetadata:
    """Metadata attached to a build plan requirement.

    version_source names the file the version came from, and is set if and
    only if version is non-empty.
    """

    version: str = ""
    version_source: Optional[str] = None
    build: bool = False
    launch: bool = False

    def __post_init__(self) -> None:
        if bool(self.version) != bool(self.version_source):
            raise ValueError(
                "version_source must be set if and only if version is set "
                f"(version={self.version!r}, version_source={self.version_source!r})"
            )

    def to_dict(self) -> dict:
        data: dict = {"version": self.version}
        if self.version_source:
            data["version-source"] = self.version_source
        data["build"] = self.build
        data["launch"] = self.launch
        return data


@dataclass(frozen=True)
class Provision:
    name: str

    def to_dict(self) -> dict:
        return {"name": self.name}


@dataclass(frozen=True)
class Requirement:
    name: str
    metadata: BuildPlanMetadata = field(default_factory=BuildPlanMetadata)

    def to_dict(self) -> dict:
        return {"name": self.name, "metadata": self.metadata.to_dict()}


@dataclass(frozen=True)
class Plan:
    """Build plan handed to the build phase.

    Serialises to the TOML table layout the build phase reads:
    [[provides]] entries followed by [[requires]] entries, each requirement
    with a [requires.metadata] table.
    """

    provides: tuple[Provision, ...] = ()
    requires: tuple[Requirement, ...] = ()

    def requirement(self, name: str) -> Optional[Requirement]:
        """Return the first requirement with the given name, if any."""
        return next((r for r in self.requires if r.name == name), None)

    def to_dict(self) -> dict:
        return {
            "provides": [p.to_dict() for p in self.provides],
            "requires": [r.to_dict() for r in self.requires],
        }

    def to_toml(self) -> str:
        return tomli_w.dumps(self.to_dict())


@dataclass(frozen=True)
class DetectResult:
    """Outcome of a detect run: a plan on pass, a reason on fail."""

    passed: bool
    plan: Optional[Plan] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, plan: Plan) -> "DetectResult":
        return cls(passed=True, plan=plan)

    @classmethod
    def fail(cls, reason: str) -> "DetectResult":
        return cls(passed=False, reason=reason)
