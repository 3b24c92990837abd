#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markconv/document.py
"""Generic document model shared by every codec.

A generic document is the plain Python value a codec library produces:
nested ``dict`` and ``list`` containers holding strings, numbers, booleans,
``None`` and date/time scalars. This module names that closed set of kinds
and checks decoded values against it, so an encoder never receives a value
it was not written to handle.

Examples
--------
>>> kind_of({"a": [1, 2]})
<DocumentKind.MAPPING: 'mapping'>
>>> validate_document({"a": {1, 2}})
Traceback (most recent call last):
    ...
markconv.exceptions.DocumentTypeError: unsupported value of type 'set' at $.a

"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Set, Tuple, Union

from markconv.exceptions import DocumentTypeError

Scalar = Union[str, int, float, bool, None, datetime.datetime, datetime.date, datetime.time]
Document = Union[Dict[str, "Document"], List["Document"], Scalar]

# Stack marker for leaving a container during traversal
_LEAVE = object()


class DocumentKind(str, Enum):
    """Kinds of value a generic document node can hold."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    DATETIME = "datetime"

    @property
    def is_container(self) -> bool:
        return self in (DocumentKind.MAPPING, DocumentKind.SEQUENCE)


def kind_of(value: Any) -> DocumentKind:
    """Classify a single value.

    Parameters
    ----------
    value : Any
        Value to classify. Containers are not inspected.

    Returns
    -------
    DocumentKind
        The kind of the value

    Raises
    ------
    DocumentTypeError
        If the value is not part of the generic document model

    """
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return DocumentKind.BOOLEAN
    if value is None:
        return DocumentKind.NULL
    if isinstance(value, str):
        return DocumentKind.STRING
    if isinstance(value, int):
        return DocumentKind.INTEGER
    if isinstance(value, float):
        return DocumentKind.FLOAT
    if isinstance(value, dict):
        return DocumentKind.MAPPING
    if isinstance(value, list):
        return DocumentKind.SEQUENCE
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return DocumentKind.DATETIME
    raise DocumentTypeError(f"unsupported value of type '{type(value).__name__}'", value=value)


def _child_path(path: str, key: Union[str, int]) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    if key.isidentifier():
        return f"{path}.{key}"
    return f"{path}[{key!r}]"


def iter_nodes(value: Any, path: str = "$") -> Iterator[Tuple[str, Any]]:
    """Walk a document depth-first, yielding ``(path, value)`` pairs.

    The root is yielded first with ``path``. Mapping children extend the
    path with ``.key`` (or ``['key']`` for keys that are not identifiers) and
    sequence children with ``[index]``.

    A container reachable from several places, as YAML anchors and aliases
    produce, is yielded at each place but its children are only walked the
    first time.

    Raises
    ------
    DocumentTypeError
        If a node is outside the document model, a mapping key is not a
        string, or a container contains itself

    """
    stack: List[Tuple[Any, Any]] = [(path, value)]
    active: Set[int] = set()
    finished: Set[int] = set()
    while stack:
        node_path, node = stack.pop()
        if node_path is _LEAVE:
            active.discard(node)
            finished.add(node)
            continue

        try:
            kind = kind_of(node)
        except DocumentTypeError as e:
            raise DocumentTypeError(
                f"unsupported value of type '{type(node).__name__}'", location=node_path, value=node
            ) from e
        yield node_path, node

        if not kind.is_container:
            continue
        node_id = id(node)
        if node_id in active:
            raise DocumentTypeError("recursive reference", location=node_path)
        if node_id in finished:
            continue
        active.add(node_id)
        stack.append((_LEAVE, node_id))

        if kind is DocumentKind.MAPPING:
            children = []
            for key, child in node.items():
                if not isinstance(key, str):
                    raise DocumentTypeError(
                        f"mapping key {key!r} of type '{type(key).__name__}' is not a string",
                        location=node_path,
                        value=key,
                    )
                children.append((_child_path(node_path, key), child))
            stack.extend(reversed(children))
        else:
            stack.extend(reversed([(_child_path(node_path, i), child) for i, child in enumerate(node)]))


def validate_document(value: Any, path: str = "$") -> Any:
    """Check that every node of ``value`` belongs to the document model.

    Parameters
    ----------
    value : Any
        Decoded value to check
    path : str, default "$"
        Location prefix used in error messages

    Returns
    -------
    Any
        ``value`` itself, unchanged

    Raises
    ------
    DocumentTypeError
        For the first node that is not a mapping with string keys, a
        sequence, or a supported scalar

    """
    for _ in iter_nodes(value, path):
        pass
    return value


def contains_kind(value: Any, kind: DocumentKind) -> bool:
    """Return True if any node of the document has the given kind."""
    return any(kind_of(node) is kind for _, node in iter_nodes(value))
