import os
from typing import Any

from sexpr.sexpr_tokens import IDENT, LPAREN, NUMBER, RPAREN, Token

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


def toks(source: str) -> list[Token]:
    """Split on whitespace into tokens: parens, digits as NUMBER, else IDENT."""
    out = []
    for word in source.replace("(", " ( ").replace(")", " ) ").split():
        if word == "(":
            out.append(Token(LPAREN))
        elif word == ")":
            out.append(Token(RPAREN))
        elif word.lstrip("-").replace(".", "", 1).isdigit():
            out.append(Token(NUMBER, word))
        else:
            out.append(Token(IDENT, word))
    return out
