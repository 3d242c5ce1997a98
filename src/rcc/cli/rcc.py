"""
rcc - Tiny-C Compiler Command-Line Interface
============================================

Usage Examples
--------------
Basic compilation (writes hello.s next to hello.c):
    $ rcc hello.c

With output file:
    $ rcc hello.c -o out.s

Show every stage (tokens, AST, assembly):
    $ rcc -p hello.c

Verbose mode (debug logging from each stage):
    $ rcc -v hello.c
"""

import logging
from pathlib import Path
from typing import Optional

import click

from rcc import __version__
from rcc.tinyc import RccCompiler, CompilerOptions
from rcc.tinyc.ast import ASTPrinter
from rcc.cli.errors import handle_cli_exception


def _require_c_source(ctx: click.Context, param: click.Parameter, value: Path) -> Path:
    """Reject input files without a .c extension."""
    if value.suffix != ".c":
        raise click.BadParameter("input file must have a .c extension")
    return value


def setup_logging(verbose: bool) -> None:
    """Send debug output from the compiler stages to stderr."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s: %(name)s: %(message)s",
        )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    metavar="FILE.c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    callback=_require_c_source,
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output assembly file (default: input with .s suffix)",
)
@click.option(
    "-p", "--print-output",
    is_flag=True,
    help="Print the output of each stage of the compiler",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="rcc")
def main(
    input_file: Path,
    output: Optional[Path],
    print_output: bool,
    verbose: bool,
) -> None:
    """
    Compile a Tiny-C source file to AArch64 assembly.

    FILE.c is the source file to compile.

    \b
    Examples:
        rcc hello.c                  # Outputs hello.s
        rcc hello.c -o out.s         # Specify output file
        rcc -p hello.c               # Print tokens, AST and assembly

    \b
    Supported language:
        - int and void functions without parameters
        - return statements
        - integer literals, zero-argument calls
        - + - * / with parentheses
    """
    setup_logging(verbose)

    compiler = RccCompiler(CompilerOptions(keep_tokens=print_output))
    if output is None:
        output = compiler.output_path_for(input_file)

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        result = compiler.compile_file(input_file)
        output.write_text(result.assembly, encoding="utf-8")

        if print_output:
            for token in result.tokens:
                click.echo(repr(token))
            click.echo()
            click.echo(ASTPrinter().print(result.ast))
            click.echo()
            click.echo(result.assembly, nl=False)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {len(result.ast.functions)} functions")
            click.echo(f"Wrote {len(result.assembly)} bytes to {output}")

        click.echo(f"Compiled {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
