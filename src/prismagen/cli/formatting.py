"""Output formatting for prismagen CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from prismagen.config import GeneratorConfig
from prismagen.models import GenerationResult, RelationshipKind, TypeDefinition
from prismagen.registry import TypeRegistry

logger = logging.getLogger(__name__)
console = Console()

_RELATION_STYLES = {
    RelationshipKind.ONE_TO_MANY: "green",
    RelationshipKind.ONE_TO_ONE: "blue",
    RelationshipKind.MANY_TO_ONE: "magenta",
}


class OutputFormatter:
    """Handles formatting CLI output for different commands."""

    def show_startup_banner(self, config: GeneratorConfig, log_level: str) -> None:
        """Show startup banner for the generate command.

        Args:
            config: Effective generator configuration
            log_level: Current log level

        """
        mode = "watch" if config.watch else "one-shot"
        startup_panel = Panel(
            f"[bold cyan]🚀 Generating Prisma schema ({mode})[/bold cyan]\n\n"
            f"[bold]Source Dir:[/bold] {config.root_dir}\n"
            f"[bold]Output:[/bold] {config.output_path}\n"
            f"[bold]Classifier:[/bold] {config.classifier}\n"
            f"[bold]Log Level:[/bold] {log_level}",
            title="🔷 prismagen",
            border_style="cyan",
        )
        console.print(startup_panel)

    def format_generation_result(self, result: GenerationResult) -> None:
        """Print the models table and a completion summary for one pass.

        Args:
            result: Outcome of the pass

        """
        if result.models:
            table = Table(
                title="📊 Generated Models",
                show_header=True,
                header_style="bold magenta",
            )
            table.add_column("#", style="dim", justify="right")
            table.add_column("Model", style="cyan", no_wrap=True)
            for index, name in enumerate(result.models, start=1):
                table.add_row(str(index), name)
            console.print(table)
        else:
            console.print(
                Panel(
                    "[yellow]No models found. The schema contains only the "
                    "preamble and banner.[/yellow]",
                    title="⚠️  Warning",
                    border_style="yellow",
                )
            )

        status = (
            "[green]written[/green]"
            if result.written
            else "[yellow]not written[/yellow]"
        )
        summary = (
            f"[bold]Files Scanned:[/bold] {result.files_scanned}\n"
            f"[bold]Files Skipped:[/bold] {result.files_failed}\n"
            f"[bold]Models:[/bold] {len(result.models)}\n"
            f"[bold]Duration:[/bold] {result.duration_seconds:.2f}s\n"
            f"[bold]Output:[/bold] {result.output_path} ({status})"
        )
        console.print(
            Panel(summary, title="🎉 Generation Summary", border_style="green")
        )

    def _model_tree(self, type_def: TypeDefinition, include_source: bool) -> Tree:
        tree = Tree(f"[bold cyan]{type_def.name}[/bold cyan]")
        if include_source and type_def.source_file:
            tree.add(f"[dim]{type_def.source_file}[/dim]")
        for prop in type_def.properties:
            optional = "?" if prop.is_optional else ""
            label = f"{prop.name}{optional}: [white]{prop.raw_type}[/white]"
            if prop.is_relation:
                style = _RELATION_STYLES[prop.relationship_kind]
                label += (
                    f" [{style}]{prop.relationship_kind.value} → "
                    f"{prop.relates_to}[/{style}]"
                )
                if prop.relationship_field:
                    label += f" [dim](via {prop.relationship_field})[/dim]"
            else:
                label += f" [yellow]{prop.prisma_type}[/yellow]"
            if prop.is_id:
                label += " [bold]@id[/bold]"
            tree.add(label)
        return tree

    def format_inspection(
        self, registry: TypeRegistry, files_scanned: int, verbose: bool = False
    ) -> None:
        """Print every extracted model with its fields and relationships.

        Args:
            registry: Resolved registry
            files_scanned: Number of files examined
            verbose: Also show the file each model came from

        """
        if not len(registry):
            console.print(
                f"[yellow]No models found in {files_scanned} scanned files[/yellow]"
            )
            return

        root = Tree(
            f"[bold blue]🔍 {len(registry)} models "
            f"from {files_scanned} files[/bold blue]"
        )
        for type_def in registry:
            root.add(self._model_tree(type_def, include_source=verbose))
        console.print(root)

        relation_count = sum(
            1 for type_def in registry for p in type_def.properties if p.is_relation
        )
        logger.debug("Inspection found %d relation fields", relation_count)

    def format_check_result(
        self, output_path: Path, up_to_date: bool, diff_lines: list[str]
    ) -> None:
        """Print whether the schema on disk matches the sources.

        Args:
            output_path: Schema file that was compared
            up_to_date: Comparison outcome
            diff_lines: Unified diff from the existing file to the fresh output

        """
        if up_to_date:
            console.print(f"[green]✅ Schema is up to date:[/green] {output_path}")
            return

        console.print(
            Panel(
                f"[red]Schema is out of date: {output_path}\n"
                "Run 'prismagen generate' to refresh it.[/red]",
                title="❌ Schema Check Failed",
                border_style="red",
            )
        )
        if diff_lines:
            console.print(Syntax("".join(diff_lines), "diff", theme="ansi_dark"))

    def show_watch_started(self, root_dir: Path) -> None:
        """Show that watch mode is active."""
        console.print(
            f"\n[bold cyan]👀 Watching {root_dir} for changes "
            "(press Ctrl+C to stop)[/bold cyan]"
        )

    def show_watch_unavailable(self, error_msg: str) -> None:
        """Show that watching could not start after the initial pass."""
        console.print(f"\n[yellow]⚠️  Watch mode unavailable: {error_msg}[/yellow]")
