"""Read tag names and class lists off lxml elements and BeautifulSoup tags."""

from __future__ import annotations

from typing import Any

from bs4 import Tag
from lxml import etree


def tag_name_of(node: Any) -> str | None:
    """Return the local tag name, or None for comments, PIs and text."""

    if isinstance(node, Tag):
        return node.name or None
    if isinstance(node, etree._Element):
        if not isinstance(node.tag, str):
            return None
        return etree.QName(node).localname
    return None


def class_names_of(node: Any) -> list[str]:
    """Return class names in document order."""

    if isinstance(node, Tag):
        value = node.get("class")
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        return list(value)
    if isinstance(node, etree._Element) and isinstance(node.tag, str):
        return (node.get("class") or "").split()
    return []
