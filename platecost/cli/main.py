"""CLI interface for the plate cost comparator."""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import typer

from core.storage import get_store

from ..config.fields import resolve_key
from ..config.loader import ConfigError, load_app_config, load_mapping_file
from ..config.models import (
    WORKFLOWS,
    AppConfig,
    ComparisonResult,
    ComparisonRow,
    InputRecord,
    Workflow,
)
from ..engine.comparator import compare
from ..excel.exporter import export_comparison_xlsx
from ..ingest.form_reader import read_inputs, record_to_storage
from ..ingest.validation import describe_errors, validate_form
from ..presentation.table import build_comparison_rows, rows_to_dataframe
from ..storage.persistence import InputPersistence

app = typer.Typer(help="Plate Cost Comparator - chemistry-free vs traditional plate costs")

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Section names accepted in an inputs file, per workflow
_SECTION_NAMES = {
    Workflow.CHEMISTRY_FREE: ("chemistry_free", "fl", "fl_inputs", "flInputs"),
    Workflow.TRADITIONAL: ("traditional", "tr", "tr_inputs", "trInputs"),
}


def _section(data: Dict[str, Any], workflow: Workflow) -> Dict[str, Any]:
    for name in _SECTION_NAMES[workflow]:
        if name in data:
            section = data[name] or {}
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{name}' must be a mapping")
            return section
    raise ConfigError(
        f"Inputs file needs a '{_SECTION_NAMES[workflow][0]}' section"
    )


def inputs_to_form_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten an inputs file into prefixed form values.

    Field keys may use any naming form (``developer-price``,
    ``developerPrice``, ``developer_price``); unknown keys are ignored.
    """
    values: Dict[str, Any] = {}
    for workflow in WORKFLOWS:
        for key, raw in _section(data, workflow).items():
            spec = resolve_key(str(key))
            if spec is None:
                logger.warning(f"Ignoring unknown field '{key}' in {workflow.label} section")
                continue
            values[workflow.prefix + spec.field_id] = raw
    return values


def run_compare(
    inputs_file: str,
    config: Optional[AppConfig] = None,
) -> Tuple[Tuple[InputRecord, InputRecord], ComparisonResult, List[ComparisonRow]]:
    """Validate and compare the inputs in ``inputs_file``.

    Returns ``((fl_record, tr_record), result, rows)``.  Raises :class:`ConfigError`
    when the file cannot be read or any required field is invalid.
    """
    config = config or AppConfig()
    values = inputs_to_form_values(load_mapping_file(inputs_file))

    errors = validate_form(values, [wf.prefix for wf in WORKFLOWS], config.required_fields)
    if errors:
        raise ConfigError(describe_errors(errors, {wf.prefix: wf.label for wf in WORKFLOWS}))

    fl_record = read_inputs(Workflow.CHEMISTRY_FREE.prefix, values)
    tr_record = read_inputs(Workflow.TRADITIONAL.prefix, values)
    result = compare(fl_record, tr_record)
    rows = build_comparison_rows(
        result,
        significance_pct=config.significance_threshold_pct,
        decimals=config.decimals,
    )
    return (fl_record, tr_record), result, rows


@app.command("compare")
def cli_compare(
    inputs_file: str = typer.Argument(..., help="YAML/JSON file with chemistry_free and traditional sections"),
    config: Optional[str] = typer.Option(None, help="Path to config YAML/JSON"),
    xlsx: Optional[str] = typer.Option(None, "--xlsx", help="Write the comparison to this .xlsx file"),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the inputs for the next session"),
):
    """Compare the monthly costs of both workflows."""
    try:
        app_config = load_app_config(config)
        (fl_record, tr_record), result, rows = run_compare(inputs_file, app_config)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    df = rows_to_dataframe(rows)
    df["!"] = ["*" if r.significant else "" for r in rows]
    typer.echo(df.to_string(index=False))
    if any(r.significant for r in rows):
        typer.echo(f"\n* 差异超过{app_config.significance_threshold_pct:g}%")

    try:
        if xlsx:
            path = export_comparison_xlsx(result, xlsx, rows=rows, inputs=(fl_record, tr_record))
            typer.echo(f"\n✓ Workbook saved to {path}")
        if save:
            InputPersistence(get_store(app_config.store_path)).save(fl_record, tr_record)
    except OSError as e:
        typer.echo(f"Could not write output: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("show-saved")
def cli_show_saved(
    config: Optional[str] = typer.Option(None, help="Path to config YAML/JSON"),
):
    """Print the inputs stored by the last calculation."""
    try:
        app_config = load_app_config(config)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    fl_record, tr_record = InputPersistence(get_store(app_config.store_path)).load()
    saved = {
        wf.storage_key: record_to_storage(rec) if rec is not None else None
        for wf, rec in ((Workflow.CHEMISTRY_FREE, fl_record), (Workflow.TRADITIONAL, tr_record))
    }
    typer.echo(json.dumps(saved, ensure_ascii=False, indent=2))


@app.command("clear-saved")
def cli_clear_saved(
    config: Optional[str] = typer.Option(None, help="Path to config YAML/JSON"),
):
    """Forget the stored inputs."""
    try:
        app_config = load_app_config(config)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    InputPersistence(get_store(app_config.store_path)).clear()
    typer.echo("✓ Saved inputs cleared")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
