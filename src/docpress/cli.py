"""docpress CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from docpress.config import settings
from docpress.errors import ConversionError
from docpress.log import configure_logging
from docpress.models import DOCX_MEDIA_TYPE, SourceDocument
from docpress.pipeline import DocumentConverter, LayoutPlanner, extract_text

app = typer.Typer(
    name="docpress",
    help="Convert DOCX documents into paginated PDF previews",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    configure_logging(log_level)


def _load_source(path: Path) -> SourceDocument:
    if not path.exists():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)
    return SourceDocument(
        content=path.read_bytes(),
        media_type=DOCX_MEDIA_TYPE,
        file_name=path.name,
    )


@app.command()
def convert(
    docx_path: Path = typer.Argument(..., help="Path to DOCX file to convert"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output PDF path (default: next to input)"
    ),
) -> None:
    """Convert a DOCX document to a paginated PDF."""
    source = _load_source(docx_path)
    output = output or docx_path.with_suffix(".pdf")

    try:
        result = DocumentConverter().convert(source)
    except ConversionError as exc:
        console.print(f"[red]Could not read {source.file_name}:[/red] {exc}")
        console.print("[dim]Download the original file to view it.[/dim]")
        raise typer.Exit(code=1)

    if not result.has_layout:
        console.print(f"[yellow]Could not lay out {source.file_name}:[/yellow] {result.layout_error}")
        console.print("[dim]Showing the extracted text instead.[/dim]")
        console.print(result.extracted_text, markup=False)
        raise typer.Exit(code=2)

    output.write_bytes(result.compiled_bytes)
    console.print(
        f"[bold green]Wrote[/bold green] {output} "
        f"[dim]({result.page_count} pages, {result.content.paragraph_count} paragraphs)[/dim]"
    )


@app.command()
def extract(
    docx_path: Path = typer.Argument(..., help="Path to DOCX file"),
) -> None:
    """Print the plain-text paragraphs of a DOCX document."""
    source = _load_source(docx_path)
    try:
        content = extract_text(source.content)
    except ConversionError as exc:
        console.print(f"[red]Could not read {source.file_name}:[/red] {exc}")
        raise typer.Exit(code=1)

    console.print(content.text, markup=False)


@app.command()
def inspect(
    docx_path: Path = typer.Argument(..., help="Path to DOCX file"),
) -> None:
    """Show the planned page layout without writing a PDF."""
    source = _load_source(docx_path)
    try:
        content = extract_text(source.content)
        layout = LayoutPlanner().plan(source.title, content, source.file_name)
    except ConversionError as exc:
        console.print(f"[red]Could not convert {source.file_name}:[/red] {exc}")
        raise typer.Exit(code=1)

    table = Table(
        title=source.file_name,
        caption=f"{layout.page_count} pages, {sum(1 for _ in layout.iter_lines())} lines",
    )
    table.add_column("Page", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Footer")
    for page in layout.pages:
        table.add_row(str(page.number), str(len(page.lines)), page.footer.text if page.footer else "")
    console.print(table)


if __name__ == "__main__":
    app()
