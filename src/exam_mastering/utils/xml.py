"""
lxml helpers shared by the mastering passes.

Attribute access mirrors how exam attributes are read throughout the
pipeline: optional attributes take an explicit default, required ones
raise ExamError pointing at the element's source line.
"""

from typing import Any, Callable, Iterable, Optional, Union

from lxml import etree

from ..errors import ExamError
from ..schema import E_NS

Number = Union[int, float]

_MISSING = object()


def local_name(element: Any) -> Optional[str]:
    """Local name of an element, None for comments and processing instructions."""
    if not isinstance(element.tag, str):
        return None
    return etree.QName(element).localname


def is_exam_element(element: Any, *names: str) -> bool:
    """Check that element lives in the exam namespace (and optionally has one of names)."""
    if not isinstance(element.tag, str):
        return False
    qname = etree.QName(element)
    if qname.namespace != E_NS:
        return False
    return not names or qname.localname in names


def get_attribute(name: str, element: etree._Element, default: Any = _MISSING) -> Any:
    value = element.get(name)
    if value is None:
        if default is _MISSING:
            raise ExamError(f"Missing required attribute {name}", element.sourceline)
        return default
    return value


def parse_number(value: str) -> Number:
    try:
        return int(value)
    except ValueError:
        return float(value)


def get_numeric_attribute(name: str, element: etree._Element, default: Any = _MISSING) -> Any:
    value = element.get(name)
    if value is None:
        if default is _MISSING:
            raise ExamError(f"Missing required attribute {name}", element.sourceline)
        return default
    try:
        return parse_number(value.strip())
    except ValueError:
        raise ExamError(f"Attribute {name} must be numeric, got {value!r}", element.sourceline)


def format_number(value: Number) -> str:
    """Format a number the way it is written to attributes (3, not 3.0)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def query_ancestors(
    element: etree._Element,
    predicate: Callable[[etree._Element], bool],
) -> Optional[etree._Element]:
    """Return the nearest ancestor matching predicate."""
    for ancestor in element.iterancestors():
        if predicate(ancestor):
            return ancestor
    return None


def xpath_or(names: Iterable[str], prefix: str = "//") -> str:
    """Build an XPath union selecting exam elements with any of the given names."""
    return " | ".join(f"{prefix}e:{name}" for name in names)


def remove_element(element: etree._Element) -> None:
    """
    Remove element from its parent.

    lxml stores the text following an element in its tail; that text
    belongs to the parent and is moved to the preceding node.
    """
    parent = element.getparent()
    if parent is None:
        return

    tail = element.tail
    if tail:
        previous = element.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + tail
        else:
            parent.text = (parent.text or "") + tail

    parent.remove(element)


def text_content(element: etree._Element) -> str:
    return "".join(element.itertext())
