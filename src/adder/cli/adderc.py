"""
adderc - Adder Compiler Command-Line Interface
==============================================

This module implements the command-line interface for the Adder compiler.

Usage Examples
--------------
Basic compilation:
    $ adderc program.snek

With output file:
    $ adderc program.snek program.s

Show the AST:
    $ adderc --ast program.snek

Evaluate with the reference interpreter:
    $ adderc --eval program.snek

Assembling the output:
    $ adderc program.snek program.s && nasm -f elf64 program.s -o program.o

Link program.o with a C driver that calls our_code_starts_here() and
prints the returned value.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from adder import __version__
from adder.ast import ASTPrinter
from adder.cli.errors import handle_cli_exception
from adder.compiler import AdderCompiler, CompilerOptions
from adder.codegen import DEFAULT_ENTRY_LABEL
from adder.interpreter import eval_expr


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--eval", "evaluate",
    is_flag=True,
    help="Print the program's value using the reference interpreter and exit",
)
@click.option(
    "--entry-label",
    default=DEFAULT_ENTRY_LABEL,
    show_default=True,
    help="Name of the exported entry point",
)
@click.option(
    "--comments",
    is_flag=True,
    help="Include the source program as a comment in the output",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="adderc")
def main(
    input_file: Path,
    output_file: Optional[Path],
    ast: bool,
    evaluate: bool,
    entry_label: str,
    comments: bool,
    verbose: bool,
) -> None:
    """
    Compile an Adder program to x86-64 assembly.

    INPUT_FILE is the Adder source file to compile. OUTPUT_FILE is the
    assembly file to write (default: INPUT_FILE with a .s suffix).

    \b
    Examples:
        adderc add.snek              # Outputs add.s
        adderc add.snek out.s        # Specify output file
        adderc --ast add.snek        # Show the parsed AST
        adderc --eval add.snek       # Print the program's value

    \b
    Language:
        expr ::= integer
               | (add1 expr) | (sub1 expr) | (negate expr)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if output_file is None:
        output_file = input_file.with_suffix(".s")

    options = CompilerOptions(
        entry_label=entry_label,
        output_comments=comments,
    )

    try:
        if verbose:
            click.echo(f"Compiling {input_file}...")

        compiler = AdderCompiler(options)
        result = compiler.compile_file(str(input_file))

        # AST dump mode
        if ast:
            click.echo(ASTPrinter().print(result.ast))
            return

        # Interpreter mode
        if evaluate:
            click.echo(eval_expr(result.ast))
            return

        output_file.write_text(result.assembly)

        if verbose:
            click.echo(f"Generated {len(result.instructions)} instructions")
            click.echo(f"Wrote {len(result.assembly)} bytes to {output_file}")

        click.echo(f"Compiled {input_file} -> {output_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
