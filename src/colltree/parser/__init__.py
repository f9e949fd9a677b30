"""Collection parser -- load documents, decode item trees, extract records.

This sub-package turns a raw collection document (JSON or YAML, local file,
URL, or stdin) into typed records the renderers can consume.

Typical usage::

    from colltree.parser import load_document, extract_document

    raw = load_document("orders.postman_collection.json")
    collection = extract_document(raw)

Sub-modules:

* :mod:`~colltree.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection.
* :mod:`~colltree.parser.decoder` -- Classifies every node of the nested
  ``item`` array as folder or request and builds the
  :class:`~colltree.models.ItemTree`.
* :mod:`~colltree.parser.extractor` -- Reads the ``info``, ``event`` and
  ``variable`` records around the tree, and collection listings.
"""

from colltree.parser.decoder import parse
from colltree.parser.extractor import extract_document
from colltree.parser.loader import load_document

__all__ = ["load_document", "parse", "extract_document"]
