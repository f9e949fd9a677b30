"""colltree -- decode and render the item trees of API collections.

This package loads Postman-style collection documents (v2.x JSON, either
exported to a file or as returned by the collections endpoint), decodes the
nested ``item`` array of folders and requests into an immutable, typed tree,
and renders that tree as indented text, a ``describe`` block, or a summary
table.

Typical workflow::

    colltree get collections orders.json billing.json
    colltree describe collections orders.json
    colltree tree orders.json

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    render: Text projections of decoded collections.
"""

__version__ = "0.1.0"
