"""ConnectWork CLI - run searches against exported marketplace data."""

import json
import logging
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from connectwork.config import DEFAULT_MIN_MATCH_SCORE, JOBS_FILE, WORKERS_FILE
from connectwork.db.repository import JsonFileRepository
from connectwork.geo.geocoder import GeocodingError, NominatimGeocoder
from connectwork.schemas.criteria import (
    DatePosted,
    InvalidCriteria,
    JobSearchCriteria,
    JobSortBy,
    SortOrder,
    WorkerSearchCriteria,
    WorkerSortBy,
)
from connectwork.schemas.job import UrgencyLevel
from connectwork.schemas.location import Coordinate
from connectwork.schemas.match import ScoredJob, ScoredWorker
from connectwork.services.search_service import (
    describe_search_origin,
    find_jobs,
    find_jobs_for_worker,
    find_workers,
    find_workers_for_job,
)

app = typer.Typer(help="ConnectWork - search and match jobs and workers")
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show pipeline logs"),
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _coordinates(lat: float | None, lon: float | None) -> Coordinate | None:
    if lat is None and lon is None:
        return None
    if lat is None or lon is None:
        console.print("[red]Error: --lat and --lon must be given together[/red]")
        raise typer.Exit(1)
    try:
        return Coordinate(lat=lat, lon=lon)
    except ValidationError:
        console.print(f"[red]Error: invalid coordinates {lat}, {lon}[/red]")
        raise typer.Exit(1)


@app.command(name="search-jobs")
def search_jobs_command(
    jobs_file: Path = typer.Option(JOBS_FILE, "--jobs", help="Path to jobs JSON export"),
    query: str | None = typer.Option(None, "--query", "-q", help="Text in title or description"),
    service: list[str] | None = typer.Option(None, "--service", help="Service id (repeatable)"),
    location: str | None = typer.Option(None, "--location", "-l", help="Search near this place"),
    lat: float | None = typer.Option(None, "--lat", help="Search origin latitude"),
    lon: float | None = typer.Option(None, "--lon", help="Search origin longitude"),
    max_distance: float | None = typer.Option(None, "--max-distance", "-d", help="Radius in km"),
    min_budget: float | None = typer.Option(None, "--min-budget", help="Lowest budget"),
    max_budget: float | None = typer.Option(None, "--max-budget", help="Highest budget"),
    urgency: list[UrgencyLevel] | None = typer.Option(None, "--urgency", help="Urgency (repeatable)"),
    date_posted: DatePosted | None = typer.Option(None, "--posted", help="Posted-date window"),
    skill: list[str] | None = typer.Option(None, "--skill", "-s", help="Your skill (repeatable)"),
    sort_by: JobSortBy | None = typer.Option(None, "--sort-by", help="Sort key"),
    sort_order: SortOrder | None = typer.Option(None, "--order", help="Sort direction"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Search open jobs."""
    coordinates = _coordinates(lat, lon)
    try:
        criteria = JobSearchCriteria(
            query=query,
            service_ids=service or [],
            location=location,
            coordinates=coordinates,
            max_distance_km=max_distance,
            min_budget=min_budget,
            max_budget=max_budget,
            urgency=urgency or [],
            date_posted=date_posted,
            required_skills=skill or [],
            sort_by=sort_by,
            sort_order=sort_order,
        )
        geocoder = NominatimGeocoder()
        results = find_jobs(JsonFileRepository(jobs_file=jobs_file), criteria, geocoder=geocoder)
    except InvalidCriteria as e:
        console.print(f"[red]Invalid search: {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error searching jobs: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(results)
    else:
        _output_jobs(results, describe_search_origin(criteria, geocoder))


@app.command(name="search-workers")
def search_workers_command(
    workers_file: Path = typer.Option(WORKERS_FILE, "--workers", help="Path to workers JSON export"),
    query: str | None = typer.Option(None, "--query", "-q", help="Name, profession or service"),
    service: list[str] | None = typer.Option(None, "--service", help="Service id (repeatable)"),
    location: str | None = typer.Option(None, "--location", "-l", help="Search near this place"),
    lat: float | None = typer.Option(None, "--lat", help="Search origin latitude"),
    lon: float | None = typer.Option(None, "--lon", help="Search origin longitude"),
    max_distance: float | None = typer.Option(None, "--max-distance", "-d", help="Radius in km"),
    min_rating: float | None = typer.Option(None, "--min-rating", help="Minimum rating (0-5)"),
    min_rate: float | None = typer.Option(None, "--min-rate", help="Minimum hourly rate"),
    max_rate: float | None = typer.Option(None, "--max-rate", help="Maximum hourly rate"),
    skill: list[str] | None = typer.Option(None, "--skill", "-s", help="Wanted skill (repeatable)"),
    sort_by: WorkerSortBy | None = typer.Option(None, "--sort-by", help="Sort key"),
    sort_order: SortOrder | None = typer.Option(None, "--order", help="Sort direction"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Search worker profiles."""
    coordinates = _coordinates(lat, lon)
    try:
        criteria = WorkerSearchCriteria(
            query=query,
            service_ids=service or [],
            location=location,
            coordinates=coordinates,
            max_distance_km=max_distance,
            min_rating=min_rating,
            min_rate=min_rate,
            max_rate=max_rate,
            skills=skill or [],
            sort_by=sort_by,
            sort_order=sort_order,
        )
        geocoder = NominatimGeocoder()
        results = find_workers(
            JsonFileRepository(workers_file=workers_file), criteria, geocoder=geocoder
        )
    except InvalidCriteria as e:
        console.print(f"[red]Invalid search: {e}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error searching workers: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(results)
    else:
        _output_workers(results, describe_search_origin(criteria, geocoder))


@app.command(name="match-workers")
def match_workers_command(
    skill: list[str] = typer.Option(..., "--skill", "-s", help="Required skill (repeatable)"),
    workers_file: Path = typer.Option(WORKERS_FILE, "--workers", help="Path to workers JSON export"),
    min_score: float = typer.Option(DEFAULT_MIN_MATCH_SCORE, "--min-score", help="Minimum relevance"),
    top_n: int | None = typer.Option(None, "--top-n", "-n", help="Number of workers to show"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Recommend workers for a set of required skills."""
    try:
        results = find_workers_for_job(
            JsonFileRepository(workers_file=workers_file), skill, min_score=min_score, top_n=top_n
        )
    except Exception as e:
        console.print(f"[red]Error matching workers: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(results)
    else:
        _output_workers(results, None)


@app.command(name="match-jobs")
def match_jobs_command(
    skill: list[str] = typer.Option(..., "--skill", "-s", help="Your skill (repeatable)"),
    jobs_file: Path = typer.Option(JOBS_FILE, "--jobs", help="Path to jobs JSON export"),
    min_score: float = typer.Option(DEFAULT_MIN_MATCH_SCORE, "--min-score", help="Minimum match"),
    top_n: int | None = typer.Option(None, "--top-n", "-n", help="Number of jobs to show"),
    output_json: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Recommend open jobs for a worker's skills."""
    try:
        results = find_jobs_for_worker(
            JsonFileRepository(jobs_file=jobs_file), skill, min_score=min_score, top_n=top_n
        )
    except Exception as e:
        console.print(f"[red]Error matching jobs: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(results)
    else:
        _output_jobs(results, None)


@app.command()
def locate(location: str = typer.Argument(..., help="Place to geocode")) -> None:
    """Geocode a place name and show its coordinates and address."""
    geocoder = NominatimGeocoder()
    try:
        coordinate = geocoder.resolve_coordinate(location)
    except GeocodingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    label = describe_search_origin(WorkerSearchCriteria(coordinates=coordinate), geocoder)
    console.print(f"[cyan]{location}[/cyan] -> {coordinate.lat:.5f}, {coordinate.lon:.5f}")
    console.print(f"  {label}")


def _output_json(results: list[ScoredJob] | list[ScoredWorker]) -> None:
    """Output results as JSON to stdout."""
    output = [result.model_dump(mode="json") for result in results]
    json.dump(obj=output, fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _distance(value: float | None) -> str:
    return f"{value:.1f} km" if value is not None else "-"


def _output_jobs(results: list[ScoredJob], origin: str | None) -> None:
    if not results:
        console.print("[yellow]No jobs match your search.[/yellow]")
        return

    title = f"{len(results)} jobs"
    if origin:
        title += f" near {origin}"

    table = Table(title=title)
    table.add_column("Title", style="cyan")
    table.add_column("Budget", style="green")
    table.add_column("Urgency")
    table.add_column("Posted", style="dim")
    table.add_column("Distance")
    table.add_column("Match")

    for result in results:
        job = result.job
        match = f"{result.skill_match_score:.0%}" if result.skill_match_score is not None else "-"
        table.add_row(
            job.title,
            f"{job.budget_min:,.0f} - {job.budget_max:,.0f}",
            job.urgency_level.value,
            job.created_at.strftime("%Y-%m-%d"),
            _distance(result.distance_km),
            match,
        )

    console.print(table)


def _output_workers(results: list[ScoredWorker], origin: str | None) -> None:
    if not results:
        console.print("[yellow]No workers match your search.[/yellow]")
        return

    heading = f"[bold green]Found {len(results)} workers"
    if origin:
        heading += f" near {origin}"
    console.print(heading + "[/bold green]\n")

    for i, result in enumerate(results, start=1):
        worker = result.worker
        relevance = result.relevance

        content = []
        if worker.profession:
            content.append(f"[cyan]Profession:[/cyan] {worker.profession}")
        if worker.location:
            content.append(f"[cyan]Location:[/cyan] {worker.location} ({_distance(result.distance_km)})")
        rating = f"{worker.rating:.1f}" if worker.rating is not None else "Not rated yet"
        content.append(f"[cyan]Rating:[/cyan] {rating}")
        if worker.hourly_rate is not None:
            content.append(f"[cyan]Rate:[/cyan] {worker.hourly_rate:,.0f}/h")
        if worker.skills:
            content.append(f"[cyan]Skills:[/cyan] {', '.join(worker.skills[:7])}")
        content.append(
            f"[cyan]Relevance:[/cyan] {relevance.total:.1%} "
            f"(Skills: {relevance.skill_match_score:.0%}, "
            f"Experience: {relevance.experience_score:.0%}, "
            f"Rating: {relevance.rating_score:.0%})"
        )

        panel = Panel(
            renderable="\n".join(content),
            title=f"[bold]#{i} {worker.full_name}[/bold]",
            border_style="green" if i == 1 else "blue",
        )
        console.print(panel)


if __name__ == "__main__":
    app()
