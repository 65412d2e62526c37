"""
Command line entry point: lex a program, print its tokens, parse it.

Without a file or ``--source`` the built-in demo program is used.
"""

import logging
import sys

import click

from . import __version__
from .debug import print_tokens, dump_ast
from .lexer import lex, lex_file, LexerError
from .parser import parse, ParseError

DEMO_SOURCE = (
    'string myGreeting = "Hello, world!"; print(myGreeting); '
    'int myInt = 3; print(myInt); myInt = 4; print(myInt); '
    'bool myBool = true; print(myBool); '
    'if (myBool) { print(myGreeting); }'
)


@click.command()
@click.argument("source_file", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--source", "-s", "source_text", help="Source text to use instead of a file.")
@click.option("--tokens/--no-tokens", "show_tokens", default=True, help="Print the token list.")
@click.option("--ast", "show_ast", is_flag=True, help="Print the parsed AST.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="tinyscript")
def main(source_file, source_text, show_tokens, show_ast, verbose):
    """Lex and parse a TinyScript program."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if source_file and source_text is not None:
        raise click.UsageError("Give either SOURCE_FILE or --source, not both.")

    try:
        if source_file:
            tokens = lex_file(source_file)
        elif source_text is not None:
            tokens = lex(source_text, "<source>")
        else:
            tokens = lex(DEMO_SOURCE, "<demo>")

        if show_tokens:
            print_tokens(tokens)

        nodes = parse(tokens)
    except (LexerError, ParseError) as e:
        click.echo(str(e).rstrip(), err=True)
        sys.exit(1)

    if show_ast:
        click.echo(dump_ast(nodes))


if __name__ == "__main__":
    main()
