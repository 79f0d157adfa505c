# main_cli.py

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from stl_quote.config import settings, setup_logging
from stl_quote.core.common_types import ParseMode, ServiceResult
from stl_quote.processes.print_3d import Print3DProcessor, list_rates
from stl_quote.services import QuoteService

setup_logging()
logger = logging.getLogger(__name__)

# --- Typer App Initialization ---
app = typer.Typer(help="STL analysis and 3D print pricing CLI Tool")
console = Console()

def _exit_on_error(result: ServiceResult) -> None:
    if not result.success:
        console.print(f"[bold red]{result.error.kind}: {result.error.message}[/]")
        raise typer.Exit(code=1)

# --- CLI Commands ---

@app.command()
def analyze(
    file_path: Path = typer.Argument(..., exists=True, file_okay=True, dir_okay=False, readable=True, help="Path to the STL file (binary or ASCII)"),
    strict: bool = typer.Option(False, "--strict", help="Reject ASCII files with malformed facet blocks instead of skipping them."),
    output_json: Optional[Path] = typer.Option(None, "--output", "-o", help="Save the full analysis as a JSON file."),
):
    """Analyzes an STL file: bounding box, volume, PLA weight and print estimates."""
    console.print(f"Processing: [cyan]{file_path.name}[/]")
    mode = ParseMode.STRICT if strict else settings.stl_parse_mode
    service = QuoteService(Print3DProcessor(parse_mode=mode))

    result = service.analyze(file_path.read_bytes())
    _exit_on_error(result)
    report = result.analysis

    table = Table(title=f"Analysis of {file_path.name}", show_header=False, padding=(0, 1))
    table.add_column()
    table.add_column(justify="right")
    table.add_row("Format:", f"{report.metadata.file_format.value} ({report.metadata.facet_count} facets)")
    table.add_row("Size (W x H x D):", f"{report.bounding_box.width_mm:.2f} x {report.bounding_box.height_mm:.2f} x {report.bounding_box.depth_mm:.2f} mm")
    table.add_row("Volume:", f"{report.volume.cm3:.2f} cm³ ({report.volume.mm3:.2f} mm³)")
    table.add_row("PLA Weight:", f"{report.material.pla_weight_grams:.2f} g")
    table.add_row("Estimated Cost (student):", f"₹{report.material.estimated_cost_inr:.2f}")
    table.add_row("Print Time:", f"{report.printing.estimated_print_time_hours:.2f} h ({report.printing.estimated_print_time_minutes} min)")
    table.add_row("Support Waste:", f"{report.printing.estimated_support_waste_percentage:.0f}% ({report.printing.support_weight_grams:.2f} g)")
    console.print(table)

    if output_json:
        output_json.parent.mkdir(parents=True, exist_ok=True)
        output_json.write_text(report.model_dump_json(by_alias=True, indent=2))
        console.print(f"\n[green]Full analysis saved to: {output_json}[/]")

# Negative grams such as "-5" would otherwise be parsed as an unknown option
@app.command(context_settings={"ignore_unknown_options": True})
def price(
    grams: float = typer.Argument(..., help="Material weight in grams"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Requester category: student, faculty or guest (default guest)"),
):
    """Calculates the itemized print price for a material weight."""
    result = QuoteService().price(grams, category)
    _exit_on_error(result)
    quote = result.quote
    b = quote.breakdown

    table = Table(title=f"Price for {b.grams:.2f} g ({b.user_type.value})", show_header=False, padding=(0, 1))
    table.add_column()
    table.add_column(justify="right")
    table.add_row("Rate:", f"₹{b.cost_per_gram:.2f}/g")
    table.add_row("Material Cost:", f"₹{b.material_cost:.2f}")
    table.add_row("Support Material:", f"₹{b.support_material_cost:.2f}")
    table.add_row("Service Charge:", f"₹{b.service_charge:.2f}")
    table.add_row("Subtotal:", f"₹{b.subtotal:.2f}")
    table.add_row(f"Discount ({b.discount_percentage:.0f}%):", f"-₹{b.discount_amount:.2f}")
    table.add_row("Final Cost:", f"₹{b.final_cost:.2f}")
    table.add_row("[bold green]Total:[/]", f"[bold green]₹{quote.cost_rupees}[/]")
    console.print(table)

@app.command()
def rates():
    """Lists the per-gram rate for each requester category."""
    table = Table(title="Print Rates", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="dim")
    table.add_column("Rate (₹/g)", justify="right")
    table.add_column("Discount", justify="right")
    for row in list_rates():
        table.add_row(row["category"], f"{row['cost_per_gram']:.2f}", f"{row['discount_percentage']:.0f}%")
    console.print(table)

# --- Main Execution ---
if __name__ == "__main__":
    app()
