"""
SEXPR CLI Entrypoint.

Command-line front end for inspecting what the parser builds from a token
stream. Scanning characters into tokens is not part of this project, so input
is a JSON array of token objects as written by an external lexer:

    [{"type": "LPAREN"}, {"type": "IDENT", "value": "+"},
     {"type": "NUMBER", "value": "1"}, {"type": "RPAREN"}]

Features:
    - Read tokens from a `.json` file, an inline string, or stdin.
    - Print every top-level expression as JSON, S-expression text or repr.
    - Optionally write the output to a file.
    - Strict (default) or lenient handling of unrecognized tokens.

Example usage:
    sexpr tokens.json
    sexpr -s '[{"type": "NUMBER", "value": "42"}]' -f sexp
    cat tokens.json | sexpr -f repr --lenient

Exit status is 1 on a syntax error and 2 on unreadable token input.

Functions:
    load_tokens(text: str) -> list[Token]
    expression_to_json(expression: Expression) -> str
    format_expressions(expressions: list[Expression], fmt: str) -> str
    run_sexpr(...) -> str
    main(argv: list[str] | None = None) -> int
"""

import argparse
import json
import sys
import traceback

from sexpr.sexpr_ast import Expression, fold
from sexpr.sexpr_parser import ParseError, Parser
from sexpr.sexpr_tokens import Token, token_from_dict

FORMATS = ("json", "sexp", "repr")


def load_tokens(text: str) -> list[Token]:
    """
    Decode a JSON array of token objects.

    Raises:
        ValueError: If the text is not valid JSON or not an array of token objects.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid token JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("Token input must be a JSON array")
    return [token_from_dict(entry) for entry in data]


def expression_to_json(expression: Expression) -> str:
    """
    Encode one tree as compact JSON in the `to_dict()` shape.

    Calls are assembled from their children's encodings, so deep trees do not
    go through the recursive `json` encoder.
    """
    return fold(
        expression,
        lambda n: json.dumps(n.to_dict()),
        lambda n, op, rest: (
            f'{{"kind": "{n.kind}", "operator": {op}, "operands": [{", ".join(rest)}]}}'
        ),
    )


def format_expressions(expressions: list[Expression], fmt: str = "json") -> str:
    if fmt == "json":
        if not expressions:
            return "[]"
        return "[\n  " + ",\n  ".join(expression_to_json(e) for e in expressions) + "\n]"
    if fmt == "sexp":
        return "\n".join(e.to_source() for e in expressions)
    if fmt == "repr":
        return "\n".join(repr(e) for e in expressions)
    raise ValueError(f"Unknown output format: {fmt}")


def run_sexpr(
    source: str | None,
    is_string: bool = False,
    fmt: str = "json",
    out: str | None = None,
    strict: bool = True,
) -> str:
    """
    Run the pipeline: read tokens, parse every top-level expression, format.

    Args:
        source (str | None): Path to a `.json` token file, raw JSON with
            `is_string`, or None to read stdin.
        is_string (bool): Treat `source` as JSON text instead of a path.
        fmt (str): One of "json", "sexp", "repr".
        out (str | None): Optional path to write the output to instead of stdout.
        strict (bool): Passed through to the Parser.

    Returns:
        str: The formatted output.

    Raises:
        ValueError: For non-`.json` paths or malformed token input.
        ParseError: If the tokens do not form valid expressions.
    """
    if source is None:
        text = sys.stdin.read()
    elif is_string:
        text = source
    else:
        if not source.endswith(".json"):
            raise ValueError("Only .json token files are supported.")
        with open(source, encoding="utf-8") as f:
            text = f.read()

    tokens = load_tokens(text)
    expressions = Parser(tokens, strict=strict).parse_all()
    result = format_expressions(expressions, fmt)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(result + "\n")
    else:
        print(result)
    return result


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the `sexpr` command.

    Supported flags:
        - `-s`, `--string`: Interpret source as JSON text instead of a file path.
        - `-f`, `--format`: Output format ('json', 'sexp' or 'repr'), default 'json'.
        - `-o`, `--out`: Write output to a file.
        - `--lenient`: Treat unrecognized tokens as end of input.
        - `--verbose`: Print tracebacks for errors.
    """
    parser = argparse.ArgumentParser(
        prog="sexpr", description="Parse S-expression tokens into an AST."
    )
    parser.add_argument(
        "source", nargs="?", help="Token file (.json), raw JSON with -s, or stdin"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as JSON text"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Stop quietly at tokens that cannot start an expression",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show tracebacks on errors"
    )

    args = parser.parse_args(argv)

    try:
        run_sexpr(
            source=args.source,
            is_string=args.string,
            fmt=args.fmt,
            out=args.out,
            strict=not args.lenient,
        )
    except ParseError as e:
        print(str(e), file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
