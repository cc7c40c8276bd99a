"""Path template resolution for endpoint tables.

Templates use ``{name}`` placeholders, e.g. ``/vat/locations/{locationId}``.
A placeholder ending in ``Id`` may be filled by the keyword without the
suffix, so ``build_endpoint(LIST_VAT_OF_LOCATION, location=1)`` works the
same as ``locationId=1``.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import quote

PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class UnresolvedPlaceholder(ValueError):
    """Raised when a template placeholder has no matching substitution."""

    def __init__(self, template: str, name: str):
        super().__init__(f"No value for placeholder '{{{name}}}' in '{template}'")
        self.template = template
        self.name = name


def build_endpoint(template: str, **substitutions: Any) -> str:
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in substitutions:
            value = substitutions[name]
        elif name.endswith("Id") and name[:-2] in substitutions:
            value = substitutions[name[:-2]]
        else:
            raise UnresolvedPlaceholder(template, name)
        if value is None:
            raise UnresolvedPlaceholder(template, name)
        return quote(str(value), safe="")

    return PLACEHOLDER.sub(_replace, template)
