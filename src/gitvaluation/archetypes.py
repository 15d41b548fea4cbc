"""Developer archetype table and free-text label normalization.

``ARCHETYPES`` is built once at import time and is read-only; both the scoring
pass and the report renderer read labels from it.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from .models import Archetype

_ARCHETYPE_LIST = (
    Archetype("ARCHITECT", "Architect", "Designs systems, makes foundational decisions", "emerald"),
    Archetype("SURGEON", "Surgeon", "Precise, high-impact changes with minimal footprint", "emerald"),
    Archetype("JANITOR", "Janitor", "Cleans up technical debt, improves maintainability", "blue"),
    Archetype("FEATURE_FACTORY", "Feature Factory", "Churns out features, quantity over quality", "amber"),
    Archetype("FIREFIGHTER", "Firefighter", "Fixes bugs reactively, often their own", "amber"),
    Archetype("COASTER", "Coaster", "Minimal impact, surface-level changes", "rose"),
    Archetype("PERFECTIONIST", "Perfectionist", "Over-engineers, refactors endlessly", "amber"),
    Archetype("RISING_STAR", "Rising Star", "Improving rapidly, high potential", "purple"),
)

ARCHETYPES: Mapping[str, Archetype] = MappingProxyType({a.key: a for a in _ARCHETYPE_LIST})

DEFAULT_ARCHETYPE_KEY = "COASTER"
DEFAULT_ARCHETYPE: Archetype = ARCHETYPES[DEFAULT_ARCHETYPE_KEY]

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_archetype_key(label: Optional[str]) -> str:
    """Convert a free-text label such as ``"feature factory"`` to a table key.

    Upper-cases, drops a leading ``"The "``, and collapses whitespace, hyphen
    and underscore runs into a single underscore.
    """
    text = str(label or "").strip().upper()
    if text.startswith("THE "):
        text = text[len("THE "):]
    return _SEPARATORS.sub("_", text).strip("_")


def resolve_archetype(label: Optional[str]) -> Archetype:
    """Look up the archetype for a model-supplied label.

    Returns ``DEFAULT_ARCHETYPE`` (Coaster) for missing or unknown labels.
    """
    return ARCHETYPES.get(normalize_archetype_key(label), DEFAULT_ARCHETYPE)
