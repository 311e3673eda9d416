from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from click.core import ParameterSource
import typer

from autopch.closure import compute_keepers
from autopch.config import (
    TomlTable,
    config_max_depth,
    config_pattern_file,
    config_patterns,
    config_strict,
    config_text,
    generation_defaults,
    merge_payload,
)
from autopch.exceptions import AutoPchError, DestinationUnwritable
from autopch.graph import iter_tree
from autopch.header import header_needs_update, render_header, write_header_if_changed
from autopch.ingest import DEFAULT_MAX_DEPTH, ParsedLog, read_log
from autopch.patterns import PatternSet
from autopch.schema import GenerationReport, TreeNodeDTO

app = typer.Typer(add_completion=False)

_STDOUT_ALIAS = "-"

USAGE = """\
Usage: autopch generate <input-deps-file> <output-header-file> [regex-list-file]
Where:
input-deps-file:
    File output by the compiler to indicate the headers used by the source.
    This file can be obtained from the compiler in the following ways:
    gcc:  g++ -H -E -o /dev/null source.cpp 2> includes.txt
    msvc: cl.exe /showIncludes /P source.cpp 1> nul 2> includes.txt

output-header-file:
    Target header file to generate ('-' prints it to stdout).
    This header should then be precompiled and force included into the
    target source file.
    To precompile:
        gcc:  simply compile the file as if it were a source file.
        msvc: do nothing. The file is precompiled in the next step.
    To force include:
        gcc:  g++ -include <output-header-file>
        msvc: cl /Yc<output-header-file> /Fp<output-header-file>.pch /FI<output-header-file>
regex-list-file [optional]:
    Line separated list of regular expressions. A header is kept when one of
    them matches its full path, which allows caching of system headers.
"""


@dataclass(frozen=True)
class ParseOptions:
    log_format: str | None
    msvc_prefix: str | None
    strict: bool
    max_depth: int

    @classmethod
    def resolve(
        cls,
        section: TomlTable,
        *,
        log_format: str | None,
        msvc_prefix: str | None,
        strict: bool | None,
        max_depth: int | None,
    ) -> ParseOptions:
        merged = merge_payload(
            {
                "format": log_format,
                "msvc_prefix": msvc_prefix,
                "strict": strict,
                "max_depth": max_depth,
            },
            section,
        )
        return cls(
            log_format=config_text(merged, "format"),
            msvc_prefix=config_text(merged, "msvc_prefix"),
            strict=config_strict(merged),
            max_depth=config_max_depth(merged) or DEFAULT_MAX_DEPTH,
        )

    def read(self, deps_file: Path) -> ParsedLog:
        return read_log(
            deps_file,
            log_format=self.log_format,
            msvc_prefix=self.msvc_prefix,
            strict=self.strict,
            max_depth=self.max_depth,
        )


def _param_is_command_line(ctx: typer.Context, param: str) -> bool:
    return ctx.get_parameter_source(param) is ParameterSource.COMMANDLINE


def _fail(exc: AutoPchError) -> typer.Exit:
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    typer.echo(USAGE, err=True)
    return typer.Exit(code=1)


def _resolve_patterns(
    section: TomlTable,
    *,
    pattern_file: Path | None,
    extra_patterns: list[str],
    config_dir: Path | None = None,
) -> tuple[PatternSet, Path | None]:
    chosen_file = pattern_file
    if chosen_file is None:
        chosen_file = config_pattern_file(section, base=config_dir)
    inline = [*config_patterns(section), *extra_patterns]
    return PatternSet.from_config(inline, chosen_file), chosen_file


def _emit_header(output: Path, text: str, *, dry_run: bool) -> bool:
    if str(output) == _STDOUT_ALIAS:
        typer.echo(text, nl=False)
        return True
    if dry_run:
        changed = header_needs_update(output, text)
        typer.echo(f"{output} {'would be rewritten' if changed else 'is up to date'}")
        return False
    written = write_header_if_changed(output, text)
    if written:
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(f"{output} is up to date")
    return written


def _write_report(path: Path, report: GenerationReport) -> None:
    payload = json.dumps(report.model_dump(), indent=2, sort_keys=True) + "\n"
    try:
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise DestinationUnwritable(path, type(exc).__name__) from exc


@app.command("generate")
def generate(
    ctx: typer.Context,
    deps_file: Path = typer.Argument(..., help="Include log emitted by the compiler."),
    output_header: Path = typer.Argument(..., help="Aggregate header to generate."),
    pattern_file: Optional[Path] = typer.Argument(
        None, help="Regex list matched against each header path."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    log_format: Optional[str] = typer.Option(
        None,
        "--format",
        help="Deps log grammar (auto|gcc|msvc).",
    ),
    msvc_prefix: Optional[str] = typer.Option(
        None,
        "--msvc-prefix",
        help="Include note prefix printed by a localized cl.exe.",
    ),
    strict: bool = typer.Option(False, "--strict/--no-strict"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1),
    pattern: List[str] = typer.Option([], "--pattern", help="Extra regex (repeatable)."),
    report: Optional[Path] = typer.Option(None, "--report"),
    dry_run: bool = typer.Option(False, "--dry-run"),
) -> None:
    """Generate the precompiled-header umbrella file for one source file."""
    section = generation_defaults(config_path=config)
    options = ParseOptions.resolve(
        section,
        log_format=log_format,
        msvc_prefix=msvc_prefix,
        strict=strict if _param_is_command_line(ctx, "strict") else None,
        max_depth=max_depth,
    )
    try:
        patterns, chosen_file = _resolve_patterns(
            section,
            pattern_file=pattern_file,
            extra_patterns=list(pattern),
            config_dir=config.parent if config is not None else None,
        )
        parsed = options.read(deps_file)
        keepers = compute_keepers(parsed.graph, patterns)
        written = _emit_header(output_header, render_header(keepers), dry_run=dry_run)
        if report is not None:
            _write_report(
                report,
                GenerationReport(
                    deps_file=str(deps_file),
                    output=str(output_header),
                    log_format=parsed.log_format,
                    line_count=parsed.line_count,
                    vertex_count=parsed.graph.vertex_count,
                    edge_count=parsed.graph.edge_count,
                    pattern_count=len(patterns),
                    keepers=keepers,
                    written=written,
                    pattern_file=str(chosen_file) if chosen_file is not None else None,
                ),
            )
    except AutoPchError as exc:
        raise _fail(exc) from exc


@app.command("tree")
def tree(
    ctx: typer.Context,
    deps_file: Path = typer.Argument(..., help="Include log emitted by the compiler."),
    config: Optional[Path] = typer.Option(None, "--config"),
    log_format: Optional[str] = typer.Option(None, "--format"),
    msvc_prefix: Optional[str] = typer.Option(None, "--msvc-prefix"),
    strict: bool = typer.Option(False, "--strict/--no-strict"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Print the include tree rebuilt from a deps log."""
    options = ParseOptions.resolve(
        generation_defaults(config_path=config),
        log_format=log_format,
        msvc_prefix=msvc_prefix,
        strict=strict if _param_is_command_line(ctx, "strict") else None,
        max_depth=max_depth,
    )
    try:
        parsed = options.read(deps_file)
    except AutoPchError as exc:
        raise _fail(exc) from exc
    entries = list(iter_tree(parsed.graph))
    if as_json:
        nodes = [
            TreeNodeDTO(path=entry.path, depth=entry.depth, repeated=entry.repeated).model_dump()
            for entry in entries
        ]
        typer.echo(json.dumps(nodes, indent=2))
        return
    for entry in entries:
        suffix = " (repeated)" if entry.repeated else ""
        typer.echo(f"{'  ' * (entry.depth - 1)}{entry.path}{suffix}")
