"""Minimal LSP server for kdlite — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from kdlite import __version__
from kdlite.errors import LexError, ParseError
from kdlite.parser import parse_source

server = LanguageServer(
    "kdlite-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the kdlite front end and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse_source(doc.source)
    except ParseError as exc:
        # Tokens carry no line/column, so the diagnostic covers the first
        # line of the document and names the token index instead.
        first_line = doc.source.splitlines()[0] if doc.source else ""
        kind = "lexical error" if isinstance(exc, LexError) else "syntax error"
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=0, character=0),
                    end=Position(line=0, character=max(1, len(first_line))),
                ),
                message=f"{kind}: {exc.message} (token {exc.index})",
                severity=DiagnosticSeverity.Error,
                source="kdlite",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
