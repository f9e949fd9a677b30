"""Extract typed collection records from a loaded document.

Two document shapes are understood:

* a **collection** -- ``{"info": {...}, "item": [...], "event": [...],
  "variable": [...]}``, optionally wrapped in the API's
  ``{"collection": {...}}`` envelope;
* a **listing** -- ``{"collections": [{"id", "name", "owner", "uid"}, ...]}``.

The item array is handed to :func:`~colltree.parser.decoder.parse`; its
errors propagate unchanged so callers can report the failing node's path.
Everything else that is wrong with a document raises
:class:`~colltree.exceptions.CollectionLoadError`.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from pydantic import ValidationError

from colltree.exceptions import CollectionLoadError, DecodeError
from colltree.models import Collection, CollectionInfo, CollectionListItem
from colltree.parser.decoder import DEFAULT_MAX_DEPTH, collect_listen_events, parse

logger = logging.getLogger(__name__)


def extract_document(
    document: dict[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Union[Collection, list[CollectionListItem]]:
    """Extract either a collection or a listing, depending on the document's shape.

    Args:
        document: A dictionary returned by
            :func:`~colltree.parser.loader.load_document`.
        max_depth: Nesting limit passed to the decoder.

    Returns:
        A :class:`~colltree.models.Collection` or a list of
        :class:`~colltree.models.CollectionListItem`.
    """
    if "collections" in document:
        return extract_collection_list(document)
    return extract_collection(document, max_depth)


def extract_collection(
    document: dict[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Collection:
    """Build a :class:`~colltree.models.Collection` from a collection document.

    Args:
        document: The collection, bare or inside a ``collection`` envelope.
        max_depth: Nesting limit passed to the decoder.

    Returns:
        The collection with its decoded item tree.

    Raises:
        CollectionLoadError: If the document has no ``info``/``item`` or
            they, the ``event`` or the ``variable`` array are malformed.
        DecodeError: If the item tree itself is malformed (including its
            :class:`~colltree.exceptions.MissingFieldError` and
            :class:`~colltree.exceptions.DepthLimitExceededError` subclasses).
    """
    body = document
    envelope = document.get("collection")
    if isinstance(envelope, dict):
        body = envelope

    raw_info = body.get("info")
    if not isinstance(raw_info, dict):
        raise CollectionLoadError("Not a collection: missing 'info' record")
    if "item" not in body:
        raise CollectionLoadError("Not a collection: missing 'item' array")

    try:
        info = CollectionInfo.model_validate(raw_info)
    except ValidationError as exc:
        raise CollectionLoadError(f"Invalid collection info: {exc}") from exc

    items = parse(body["item"], max_depth=max_depth)

    try:
        listen_events = collect_listen_events(body.get("event"))
    except DecodeError as exc:
        raise CollectionLoadError(f"Invalid collection events: {exc.detail}") from exc

    collection = Collection(
        info=info,
        items=items,
        listen_events=listen_events,
        variables=_variable_keys(body.get("variable")),
    )
    logger.debug("Extracted collection '%s' (%s)", info.name, info.id)
    return collection


def extract_collection_list(document: dict[str, Any]) -> list[CollectionListItem]:
    """Validate the entries of a ``{"collections": [...]}`` listing.

    Raises:
        CollectionLoadError: If ``collections`` is not a list or an entry
            fails validation.
    """
    entries = document.get("collections")
    if not isinstance(entries, list):
        raise CollectionLoadError("'collections' must be a list")

    try:
        return [CollectionListItem.model_validate(entry) for entry in entries]
    except ValidationError as exc:
        raise CollectionLoadError(f"Invalid collection listing: {exc}") from exc


def _variable_keys(raw_variables: Any) -> tuple[str, ...]:
    """Return the ``key`` of every collection variable, in source order."""
    if raw_variables is None:
        return ()
    if not isinstance(raw_variables, list):
        raise CollectionLoadError("'variable' must be a list")

    keys: list[str] = []
    for position, variable in enumerate(raw_variables):
        if not isinstance(variable, dict):
            raise CollectionLoadError(f"variable[{position}] must be an object")
        key = variable.get("key")
        if isinstance(key, str):
            keys.append(key)
    return tuple(keys)
