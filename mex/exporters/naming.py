"""Output name templates."""

from __future__ import annotations

import re
from pathlib import PurePath

from mex.errors import TemplateError

# {{Index}}, {{ Name }} and {{.Ext}} are all accepted
_FIELD_PATTERN = re.compile(r'\{\{\s*\.?(\w+)\s*\}\}')

TEMPLATE_FIELDS = ("Index", "Name", "Ext")


def strip_ext(name: str) -> str:
    """Return the base name of name without its final extension."""
    base = PurePath(name).name
    return base[: len(base) - len(PurePath(base).suffix)]


def render_name(template: str, name: str, index: int, reference_count: int) -> str:
    """
    Render an output name template.

    Index is zero-padded to the number of digits in reference_count, so
    callers pass the highest value they expect to render (collection
    length minus one).

    Args:
        template: Template using {{Index}}, {{Name}} and {{Ext}} fields
        name: Source file or directory name
        index: Value substituted for Index
        reference_count: Number whose digit count sets the Index width

    Returns:
        str: The rendered name

    Raises:
        TemplateError: If the template uses an unknown field
    """
    width = len(str(max(reference_count, 0)))
    base = PurePath(name).name
    values = {
        "Index": f"{index:0{width}d}",
        "Name": base,
        "Ext": PurePath(base).suffix.lower(),
    }

    def substitute(match: re.Match[str]) -> str:
        field = match.group(1)
        if field not in values:
            raise TemplateError(
                f"Unknown template field '{field}' in {template!r} "
                f"(expected one of: {', '.join(TEMPLATE_FIELDS)})"
            )
        return values[field]

    return _FIELD_PATTERN.sub(substitute, template)
