"""Typer based command line entry points for DocFlow."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import typer

from docflow.config import Settings, default_settings, load_settings
from docflow.core.errors import DocFlowError
from docflow.core.logger import get_logger, set_level
from docflow.services.company_survey import (
    XLSX_CONTENT_TYPE,
    build_survey_form,
    parse_survey_form,
    survey_file_name,
    validate_upload,
)
from docflow.services.document_generator import generate_document_set, read_manual_template
from docflow.services.records import load_record_store
from docflow_io import WorkbookReadError, inspect_template

app = typer.Typer(help="Fill official application workbooks and exchange company surveys.")

_DATE_FORMATS = ["%Y-%m-%d"]


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure logging before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    get_logger()
    set_level(level_value)


def _settings(path: Optional[Path]) -> Settings:
    return load_settings(path) if path else default_settings()


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value else None


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command("generate")
def cli_generate(
    project_id: str = typer.Argument(..., help="Project (application case) id"),
    records: Path = typer.Option(..., "--records", help="Records YAML file", exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(..., "--out", "-o", help="Directory for the ZIP archive", resolve_path=True),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=_DATE_FORMATS, help="Application date (YYYY-MM-DD)"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Alternate settings YAML"),
) -> None:
    """Generate the application document set for a project as a ZIP archive."""

    logger = get_logger()
    try:
        settings = _settings(settings_path)
        store = load_record_store(records)
        result = generate_document_set(project_id, store=store, settings=settings, as_of=_as_date(as_of))
    except DocFlowError as exc:
        raise _fail(f"Generation failed: {exc}") from exc

    out.mkdir(parents=True, exist_ok=True)
    archive_path = out / result.archive_name
    archive_path.write_bytes(result.archive)

    typer.echo(f"Archive: {archive_path}")
    for item in result.manifest:
        typer.echo(f"  {item.doc_code}: {item.file_name}")
    for doc_code, reason in result.failed.items():
        typer.secho(f"  {doc_code} failed: {reason}", fg=typer.colors.YELLOW)
    for doc_code, cells in result.unfilled_cells.items():
        typer.secho(f"  {doc_code}: {len(cells)} cells not filled", fg=typer.colors.YELLOW)
    logger.info("CLI generation completed: %s", archive_path)


@app.command("survey-export")
def cli_survey_export(
    company_id: str = typer.Argument(..., help="Company id"),
    records: Path = typer.Option(..., "--records", help="Records YAML file", exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(..., "--out", "-o", help="Directory for the survey workbook", resolve_path=True),
    as_of: Optional[datetime] = typer.Option(None, "--as-of", formats=_DATE_FORMATS, help="Reference date (YYYY-MM-DD)"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Alternate settings YAML"),
) -> None:
    """Write a pre-filled company survey workbook."""

    try:
        settings = _settings(settings_path)
        store = load_record_store(records)
        content = build_survey_form(company_id, store=store, settings=settings, as_of=_as_date(as_of))
        company = store.get_company(company_id)
    except DocFlowError as exc:
        raise _fail(f"Survey export failed: {exc}") from exc

    out.mkdir(parents=True, exist_ok=True)
    path = out / survey_file_name(company.name if company else company_id)
    path.write_bytes(content)
    typer.echo(f"Survey: {path}")


@app.command("survey-import")
def cli_survey_import(
    file: Path = typer.Argument(..., help="Completed survey workbook", exists=True, readable=True, dir_okay=False, resolve_path=True),
    company_id: Optional[str] = typer.Option(None, "--company-id", help="Reject surveys belonging to another company"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Alternate settings YAML"),
) -> None:
    """Parse a completed survey workbook and print it as JSON."""

    content = file.read_bytes()
    try:
        settings = _settings(settings_path)
        content_type = XLSX_CONTENT_TYPE if file.suffix.lower() == ".xlsx" else None
        validate_upload(file.name, content_type, len(content), settings.survey.max_upload_bytes)
        survey = parse_survey_form(content, expected_company_id=company_id)
    except DocFlowError as exc:
        raise _fail(f"Survey import failed: {exc}") from exc

    typer.echo(survey.model_dump_json(indent=2))


@app.command("template")
def cli_template(
    doc_code: str = typer.Argument(..., help="Document code of a hand-filled form, e.g. DOC-006"),
    out: Path = typer.Option(..., "--out", "-o", help="Directory for the blank template", resolve_path=True),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Alternate settings YAML"),
) -> None:
    """Copy the blank template of a document that is filled in by hand."""

    try:
        template = read_manual_template(doc_code, _settings(settings_path))
    except DocFlowError as exc:
        raise _fail(f"Template unavailable: {exc}") from exc

    out.mkdir(parents=True, exist_ok=True)
    path = out / template.file_name
    path.write_bytes(template.content)
    typer.echo(f"Template: {path} ({template.content_type})")


@app.command("inspect")
def cli_inspect(
    template: Path = typer.Argument(..., help="Template workbook", exists=True, readable=True, dir_okay=False, resolve_path=True),
    sheets: List[str] = typer.Option([], "--sheet", help="Limit to these sheets (repeat for multiple)"),
    csv: Optional[Path] = typer.Option(None, "--csv", help="Write the cell listing to CSV"),
) -> None:
    """List the non-empty cells of a template to locate mapping addresses."""

    try:
        frame = inspect_template(template, sheets or None)
    except (FileNotFoundError, WorkbookReadError) as exc:
        raise _fail(f"Inspection failed: {exc}") from exc

    if csv is not None:
        csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(csv, index=False, encoding="utf-8-sig")
        typer.echo(f"Wrote {len(frame)} cells to {csv}")
        return
    if frame.empty:
        typer.echo("No values found")
        return
    typer.echo(frame.to_string(index=False))


if __name__ == "__main__":
    app()
