"""
bundle-install detect CLI.

Runs the detect phase once for a source tree and reports the outcome with the
detect-phase exit codes:

    0    pass: build plan written to PLAN_PATH (or stdout)
    100  fail: this buildpack does not apply
    1    error: the build should abort
"""

from pathlib import Path
from typing import Optional

import typer

from bundle_install.core.config import get_settings
from bundle_install.core.logging import configure_structlog, get_logger
from bundle_install.detector import DetectContext, detect
from bundle_install.detector.ruby import GemfileParser, RubyVersionFileParser

DETECT_PASS = 0
DETECT_FAIL = 100
DETECT_ERROR = 1

app = typer.Typer(
    name="bundle-install-detect",
    help="Detect whether a source tree should be built with Bundler",
    no_args_is_help=True,
)


@app.callback()
def main(
    debug: Optional[bool] = typer.Option(
        None, "--debug/--json-logs", help="Console logs (default) or JSON logs"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show parser diagnostics"
    ),
) -> None:
    settings = get_settings()
    configure_structlog(
        debug=settings.debug if debug is None else debug,
        level="DEBUG" if verbose else settings.log_level,
    )


@app.command("detect")
def detect_command(
    platform_dir: Optional[Path] = typer.Argument(None, help="Platform directory"),
    plan_path: Optional[Path] = typer.Argument(
        None, help="Where to write the build plan TOML; stdout when omitted"
    ),
    working_dir: Optional[Path] = typer.Option(
        None, "--working-dir", "-w", help="Application source directory"
    ),
    ruby_version_in_working_dir: Optional[bool] = typer.Option(
        None,
        "--ruby-version-in-working-dir/--ruby-version-in-cwd",
        help="Where to look for .ruby-version",
    ),
) -> None:
    """
    Decide whether Bundler applies and emit the build plan.
    """
    settings = get_settings()
    log = get_logger("bundle_install.detect")

    context = DetectContext(
        working_dir=working_dir or settings.resolve_working_dir(),
        platform_dir=platform_dir,
        plan_path=plan_path,
    )
    if ruby_version_in_working_dir is None:
        ruby_version_in_working_dir = settings.ruby_version_in_working_dir

    try:
        result = detect(
            context,
            GemfileParser(),
            RubyVersionFileParser(),
            log,
            ruby_version_in_working_dir=ruby_version_in_working_dir,
        )
    except Exception as exc:
        log.error("detect failed", working_dir=str(context.working_dir), error=str(exc))
        raise typer.Exit(code=DETECT_ERROR)

    if not result.passed:
        typer.echo(result.reason)
        raise typer.Exit(code=DETECT_FAIL)

    plan_toml = result.plan.to_toml()
    if context.plan_path is None:
        typer.echo(plan_toml, nl=False)
    else:
        context.plan_path.parent.mkdir(parents=True, exist_ok=True)
        context.plan_path.write_text(plan_toml, encoding="utf-8")

    mri = result.plan.requirement("mri")
    log.debug(
        "detect passed",
        mri_version=mri.metadata.version if mri else "",
        version_source=mri.metadata.version_source if mri else None,
    )


@app.command("version-of")
def version_of(
    path: Path = typer.Argument(..., help="Gemfile or .ruby-version file"),
    pin_file: bool = typer.Option(
        False, "--pin-file", help="Parse PATH as a .ruby-version file"
    ),
) -> None:
    """
    Print the Ruby version constraint a single file declares.
    """
    parser = RubyVersionFileParser() if pin_file else GemfileParser()
    log = get_logger("bundle_install.version_of")

    try:
        version = parser.parse_version(path)
    except Exception as exc:
        log.error("could not parse version file", path=str(path), error=str(exc))
        raise typer.Exit(code=DETECT_ERROR)

    typer.echo(version)


if __name__ == "__main__":
    app()
