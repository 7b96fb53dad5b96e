"""CLI for the creator match engine.

Commands:
- recommend: Score eligible candidates for a campaign and persist the ranked list
- explain: Explain a persisted recommendation for one campaign/candidate pair
- health: Show the effective configuration
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .application.criteria import parse_matching_criteria
from .application.recommendations import RecommendationEngine
from .config import MatchingConfig
from .config_file import load_matching_config_file
from .domain.explanation import FACTOR_DISPLAY_NAMES
from .domain.models import MatchResult
from .exceptions import (
    CriteriaValidationError,
    MatchingError,
    RecommendationNotFoundError,
)
from .observability import set_log_level
from .protocols import FileSystem, ProgressReporter

EXIT_FAILURE = 1
EXIT_INVALID_CRITERIA = 2
EXIT_NOT_FOUND = 3


def _no_op() -> None:
    return None


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(
        self,
        *,
        config: MatchingConfig,
        progress: ProgressReporter | None,
    ) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI.

    ``close`` releases adapter resources (HTTP sessions) once a command finishes.
    """

    fs: FileSystem
    engine: RecommendationEngine
    close: Callable[[], None] = _no_op


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: MatchingConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(
        self,
        *,
        config: MatchingConfig | None = None,
        progress: ProgressReporter | None = None,
    ) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config, progress=progress)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the creator-match entry point.")


class CriteriaFileError(typer.BadParameter):
    """Raised when the criteria file is missing or not a JSON object."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Criteria file must exist and contain a JSON object: {path}")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"creator-match {__version__}")
        raise typer.Exit()


def _exit_code_for(error: MatchingError) -> int:
    if isinstance(error, CriteriaValidationError):
        return EXIT_INVALID_CRITERIA
    if isinstance(error, RecommendationNotFoundError):
        return EXIT_NOT_FOUND
    return EXIT_FAILURE


def _fail(error: MatchingError) -> typer.Exit:
    rprint(f"[red]✗ {error}[/red]")
    return typer.Exit(code=_exit_code_for(error))


def _build_or_fail(
    state: CliContext,
    *,
    config: MatchingConfig | None = None,
    progress: ProgressReporter | None = None,
) -> CliDependencies:
    try:
        return state.build_dependencies(config=config, progress=progress)
    except MatchingError as exc:
        raise _fail(exc) from exc


def _results_table(results: list[MatchResult]) -> Table:
    table = Table(title="Recommendations")
    table.add_column("#", justify="right")
    table.add_column("Candidate")
    table.add_column("Score", justify="right")
    table.add_column("Reasons")
    for rank, result in enumerate(results, start=1):
        table.add_row(
            str(rank),
            result.candidate_id,
            f"{result.overall * 100:.1f}%",
            "; ".join(result.reasons) or "-",
        )
    return table


def _result_payload(result: MatchResult) -> dict[str, object]:
    return {
        "candidateId": result.candidate_id,
        "score": result.overall,
        "reasons": list(result.reasons),
        "matchingFactors": result.factors.as_dict(),
        "algorithmVersion": result.algorithm_version,
        "createdAt": result.created_at.isoformat(),
    }


def create_app(deps_builder: DependenciesBuilder, *, config_fs: FileSystem) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder.

    Args:
        deps_builder: Builds adapters and the engine for each command.
        config_fs: File system used to read ``--config`` before any adapter exists.
    """
    app = typer.Typer(
        add_completion=False,
        help="Creator match engine: score, rank and explain candidates for a campaign",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                help="TOML config file overriding environment settings",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = MatchingConfig.from_env()
        if config_path is not None:
            try:
                config = config.with_file_overrides(
                    load_matching_config_file(path=config_path, fs=config_fs)
                )
            except MatchingError as exc:
                raise _fail(exc) from exc
        set_log_level(config.log_level)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def recommend(
        ctx: typer.Context,
        criteria_path: Annotated[
            Path,
            typer.Option(
                "--criteria",
                "-c",
                help="JSON file with campaignId, budget, targetAudience, requirements",
            ),
        ],
        threshold: Annotated[
            float | None,
            typer.Option(
                "--threshold",
                "-t",
                min=0.0,
                max=1.0,
                help="Override minimum overall score (exclusive, default: 0.3)",
            ),
        ] = None,
        limit: Annotated[
            int | None,
            typer.Option("--limit", "-n", min=1, help="Override maximum results (default: 20)"),
        ] = None,
        min_followers: Annotated[
            int | None,
            typer.Option(
                "--min-followers",
                min=0,
                help="Default follower floor when the criteria omit requirements.minFollowers",
            ),
        ] = None,
        workers: Annotated[
            int | None,
            typer.Option("--workers", min=1, help="Scoring worker threads"),
        ] = None,
        timeout: Annotated[
            float | None,
            typer.Option("--timeout", min=0.001, help="Cancel the run after this many seconds"),
        ] = None,
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print results as JSON"),
        ] = False,
    ) -> None:
        """Generate, persist and print recommendations for one campaign."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            min_score=threshold,
            max_results=limit,
            min_followers=min_followers,
            max_workers=workers,
            run_timeout_seconds=timeout,
        )
        progress = None if as_json else _build_progress()
        deps = _build_or_fail(state, config=config, progress=progress)
        try:
            if not deps.fs.exists(criteria_path):
                raise CriteriaFileError(criteria_path)
            try:
                payload = deps.fs.read_json(criteria_path)
            except (RuntimeError, ValueError) as exc:
                raise CriteriaFileError(criteria_path) from exc
            criteria = parse_matching_criteria(
                payload, default_min_followers=config.min_followers
            )
            results = deps.engine.generate_recommendations(criteria)
        except MatchingError as exc:
            raise _fail(exc) from exc
        finally:
            deps.close()

        if as_json:
            typer.echo(
                json.dumps(
                    {
                        "campaignId": criteria.campaign_id,
                        "recommendations": [_result_payload(result) for result in results],
                        "algorithm": config.algorithm_version,
                    },
                    ensure_ascii=False,
                    indent=2,
                )
            )
            return

        rprint(
            f"[green]✓ Generated {len(results)} recommendations[/green] "
            f"for campaign {criteria.campaign_id}"
        )
        if results:
            rprint(_results_table(results))

    @app.command()
    def explain(
        ctx: typer.Context,
        campaign_id: Annotated[str, typer.Argument(help="Campaign identifier")],
        candidate_id: Annotated[str, typer.Argument(help="Candidate identifier")],
    ) -> None:
        """Explain the newest persisted recommendation for a campaign/candidate pair."""
        state = _get_context(ctx)
        deps = _build_or_fail(state)
        try:
            explanation = deps.engine.explain_recommendation(campaign_id, candidate_id)
        except MatchingError as exc:
            raise _fail(exc) from exc
        finally:
            deps.close()

        rprint(f"[bold]{explanation.text}[/bold]")
        for name, value in explanation.factors.as_dict().items():
            rprint(f"  {FACTOR_DISPLAY_NAMES[name]}: {value * 100:.1f}%")
        if explanation.reasons:
            rprint(f"  Reasons: {'; '.join(explanation.reasons)}")

    @app.command()
    def health(ctx: typer.Context) -> None:
        """Show the effective configuration."""
        config = _get_context(ctx).config
        rprint(f"[green]✓ creator-match {__version__} is configured[/green]")
        rprint(f"  Candidate source: {config.candidate_source}")
        rprint(f"  Results: {config.results_path}")
        rprint(
            f"  Policy: score > {config.min_score}, top {config.max_results}, "
            f"min followers {config.min_followers}"
        )
        rprint(f"  Algorithm: {config.algorithm_version}")
        rprint(f"  Log level: {config.log_level}")

    _ = (main, recommend, explain, health)

    return app


def _build_progress() -> ProgressReporter:
    from .cli_progress import CliProgressReporter

    return CliProgressReporter()
