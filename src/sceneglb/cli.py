"""CLI entry point for sceneglb.

Usage:
    sceneglb export scene.yaml out.glb    # Export one scene description
    sceneglb inspect out.glb              # Show GLB header and chunks
    sceneglb run                          # Run full pipeline
    sceneglb run-step s01_glb_export -i '{"scene_path": "scene.json"}'
    sceneglb info                         # Show pipeline info
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from sceneglb.core.logging import setup_logging

app = typer.Typer(name="sceneglb", help="Scene forest to GLB exporter")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def export(
    scene: Path = typer.Argument(..., help="Scene description (.json/.yaml)"),
    output: Path = typer.Argument(..., help="Destination .glb file"),
    config: Path = typer.Option(None, "--config", "-c", help="GLB export config YAML"),
    no_attributes: bool = typer.Option(False, "--no-attributes", help="Omit node extras"),
    dump_json: bool = typer.Option(False, "--dump-json", help="Pretty-print the glTF JSON"),
    atomic: bool = typer.Option(False, "--atomic", help="Write via temp file + rename"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Export a scene description to a GLB file."""
    setup_logging(log_level)
    from sceneglb.core.pipeline_runner import load_step_config
    from sceneglb.steps.s01_glb_export.config import GlbExportConfig
    from sceneglb.core.logging import logging_callback
    from sceneglb.steps.s01_glb_export.exporter import export_scene
    from sceneglb.utils.io import load_scene

    cfg = load_step_config(config, GlbExportConfig)
    store = load_scene(scene)
    ok = export_scene(
        store,
        logging_callback(),
        output,
        include_attributes=cfg.include_attributes and not no_attributes,
        max_depth=cfg.max_depth,
        dump_json=sys.stdout if (dump_json or cfg.dump_json) else None,
        atomic=atomic or cfg.atomic_write,
    )
    if not ok:
        console.print(f"[red]Export failed: {output}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Wrote {output}[/green]")


@app.command()
def inspect(
    glb: Path = typer.Argument(..., help="GLB file to inspect"),
    show_json: bool = typer.Option(False, "--json", help="Print the JSON chunk"),
) -> None:
    """Show the header and chunk table of a GLB file."""
    from sceneglb.steps.s01_glb_export._glb_reader import GlbFormatError, read_glb

    try:
        parsed = read_glb(glb)
    except (OSError, GlbFormatError) as exc:
        console.print(f"[red]{glb}: {exc}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{glb.name}: glTF v{parsed.version}, {parsed.total_length} bytes")
    table.add_column("#", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Length", style="green")
    for i, chunk in enumerate(parsed.chunks):
        table.add_row(str(i), chunk.type_name, str(chunk.length))
    console.print(table)

    document = parsed.json
    console.print(
        f"nodes: {len(document.get('nodes', []))}, "
        f"scene roots: {len(document.get('scenes', [{}])[0].get('nodes', []))}"
    )
    if show_json:
        console.print_json(data=document)


@app.command()
def run(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Run the full pipeline."""
    setup_logging()
    from sceneglb.core.pipeline_runner import run_pipeline

    run_pipeline(config)


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. s01_glb_export)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from sceneglb.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    config_file = Path(entry.config_file) if entry.config_file else None
    step_config = load_step_config(config_file, step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    if input_json:
        input_data = json.loads(input_json)
    else:
        input_data = dict(entry.inputs)
        missing = [f for f in step_cls.required_inputs() if f not in input_data]
        if missing:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {missing}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  sceneglb run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    step_input = step_cls.input_type(**input_data)
    output = step_instance.execute(step_input)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from sceneglb.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
