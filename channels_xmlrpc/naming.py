"""Method name conventions for incoming XML-RPC calls.

XML-RPC clients commonly qualify method names with dots, e.g.
``system.listMethods`` or ``Blog.Post.create``. Two conventions are supported
for mapping such a name onto a consumer method:

``flat``
    Every dot is removed and the remaining string is the method name. The
    target is always the consumer that received the call.
    ``"Foo.Bar.baz"`` becomes ``"FooBarbaz"``.

``segmented``
    Runs of dots become the namespace separator ``::`` and the last segment
    is the method name; the preceding segments name the target consumer.
    ``"Foo.Bar.baz"`` becomes ``("Foo::Bar", "baz")``.

The two conventions are incompatible, so a consumer picks exactly one (see
``XmlRpcBase.naming_convention`` and the ``NAMING_CONVENTION`` setting).
"""

from __future__ import annotations

import re
from enum import Enum

NAMESPACE_SEPARATOR = "::"

_DOTS = re.compile(r"\.+")
_LAST_SEGMENT = re.compile(r"^(.*\w)::(\w+)$")


class NamingConvention(str, Enum):
    """Supported method name conventions."""

    FLAT = "flat"
    SEGMENTED = "segmented"


def flat_method_name(name: str) -> tuple[str, str]:
    """Strip every dot from ``name``.

    Returns
    -------
    tuple[str, str]
        An empty target path and the cleaned method name.
    """
    return "", name.replace(".", "")


def segmented_method_name(name: str) -> tuple[str, str]:
    """Split a dotted name into a target path and a method name.

    Parameters
    ----------
    name : str
        Method name as received, e.g. ``"Foo.Bar.baz"``.

    Returns
    -------
    tuple[str, str]
        ``(target_path, method_name)``. The path is empty when the name has
        no separator left after normalization.

    Examples
    --------
    >>> segmented_method_name("Foo.Bar.baz")
    ('Foo::Bar', 'baz')
    >>> segmented_method_name("..baz")
    ('', 'baz')
    >>> segmented_method_name("baz")
    ('', 'baz')
    """
    name = _DOTS.sub(NAMESPACE_SEPARATOR, name)
    if name.startswith(NAMESPACE_SEPARATOR):
        name = name[len(NAMESPACE_SEPARATOR) :]

    match = _LAST_SEGMENT.match(name)
    if match is None:
        return "", name
    return match.group(1), match.group(2)


def split_method_name(
    name: str, convention: NamingConvention | str = NamingConvention.FLAT
) -> tuple[str, str]:
    """Apply ``convention`` to ``name``.

    Raises
    ------
    ValueError
        If ``convention`` is not a known convention.
    """
    if NamingConvention(convention) is NamingConvention.SEGMENTED:
        return segmented_method_name(name)
    return flat_method_name(name)


def join_namespace(*parts: str) -> str:
    """Join non-empty namespace parts with the separator."""
    return NAMESPACE_SEPARATOR.join(part for part in parts if part)
