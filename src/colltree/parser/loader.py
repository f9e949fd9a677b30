"""Load collection documents from a URL, local file, or stdin.

This module handles all I/O for reading raw collection documents and turning
them into Python dictionaries. JSON is tried first and YAML second, with the
file extension or response content type used as a hint. Whatever the
source, the top-level value must be a mapping.

The public function is :func:`load_document`. Its result goes to
:func:`~colltree.parser.extractor.extract_document`.

URL loading is a single unauthenticated GET, meant for exported collections
published at a plain link; it performs no retries.

The JSON and YAML parsers recurse per nesting level. A document nested past
their limit raises :class:`~colltree.exceptions.CollectionLoadError` like any
other unreadable source.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from colltree.exceptions import CollectionLoadError


def load_document(source: str) -> dict[str, Any]:
    """Load a collection document from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The parsed document as a dictionary.

    Raises:
        CollectionLoadError: If the source cannot be read or parsed.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    """Read a document from stdin."""
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise CollectionLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise CollectionLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document from a URL.

    Raises:
        CollectionLoadError: On an HTTP error status, a network failure, or
            unparseable content.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise CollectionLoadError(
            f"HTTP {exc.response.status_code} fetching collection from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise CollectionLoadError(
            f"Failed to fetch collection from {url}: {exc}"
        ) from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load a document from a local file.

    ``.json``, ``.yaml`` and ``.yml`` extensions set the parse hint; other
    extensions fall back to content-based detection.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise CollectionLoadError(f"File not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectionLoadError(f"Failed to read {path}: {exc}") from exc

    if not content.strip():
        raise CollectionLoadError(f"File is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.
    Valid JSON is also valid YAML, but the JSON parser is stricter and
    faster, and its errors are the ones worth reporting for ``.json`` files.

    Both parsers recurse once per nesting level, so a document can be too
    deep for them well before the decoder's own depth limit is reached.
    That case is reported as a load error rather than left to crash.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        CollectionLoadError: If the content cannot be parsed as either
            format, is nested too deeply to parse, or is not a mapping.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise CollectionLoadError(f"Invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise _too_deep(exc) from None
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    except RecursionError as exc:
        raise _too_deep(exc) from None
    else:
        return _require_mapping(result)

    msg = "Failed to parse document as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise CollectionLoadError(msg)


def _too_deep(exc: RecursionError) -> CollectionLoadError:
    return CollectionLoadError(f"Document is nested too deeply to parse ({exc})")


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise CollectionLoadError(
            f"Document must be a JSON/YAML object (got {kind})"
        )
    return result
