#   Copyright 2022 The PyMC Developers
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.


"""Fixed causal structures of the mediation-analysis DAG.

Every variable group is bound to a one-letter symbol:

* ``A`` exposure
* ``M`` mediator(s)
* ``Y`` outcome
* ``C`` confounders not affected by the exposure (baseline confounders)
* ``L`` confounders affected by the exposure (post-exposure confounders)

``A``, ``M`` and ``Y`` are always drawn; ``C`` and ``L`` only when given. The edges
of a template are the edges of :data:`EDGES` whose endpoints are both present.
"""

import logging

from typing import Dict, List, Tuple

__all__ = [
    "SYMBOLS",
    "REQUIRED_SYMBOLS",
    "ROLE_LABELS",
    "EDGES",
    "TEMPLATES",
    "select_template",
    "template_symbols",
    "template_edges",
]

_log = logging.getLogger("mdag")

SYMBOLS: Tuple[str, ...] = ("A", "M", "Y", "C", "L")
REQUIRED_SYMBOLS: Tuple[str, ...] = ("A", "M", "Y")

ROLE_LABELS: Dict[str, str] = {
    "A": "exposure",
    "M": "mediator",
    "Y": "outcome",
    "C": "confounders not affected by the exposure",
    "L": "confounders affected by the exposure",
}

# (parent, child)
EDGES: Tuple[Tuple[str, str], ...] = (
    ("A", "Y"),
    ("M", "Y"),
    ("C", "Y"),
    ("L", "Y"),
    ("A", "M"),
    ("C", "M"),
    ("L", "M"),
    ("C", "A"),
    ("A", "L"),
)

# (basec given, postc given) -> template name
TEMPLATES: Dict[Tuple[bool, bool], str] = {
    (False, False): "neither",
    (True, False): "basec",
    (False, True): "postc",
    (True, True): "both",
}

_OPTIONAL_SYMBOLS: Dict[str, Tuple[str, ...]] = {
    "neither": (),
    "basec": ("C",),
    "postc": ("L",),
    "both": ("C", "L"),
}


def select_template(has_basec: bool, has_postc: bool) -> str:
    name = TEMPLATES[(bool(has_basec), bool(has_postc))]
    _log.debug("Selected mediation DAG template %r", name)
    return name


def template_symbols(name: str) -> Tuple[str, ...]:
    """Symbols drawn by template ``name``, in caption order."""
    try:
        optional = _OPTIONAL_SYMBOLS[name]
    except KeyError:
        raise ValueError(
            f"Unknown template {name!r}, expected one of {sorted(_OPTIONAL_SYMBOLS)}"
        ) from None
    present = set(REQUIRED_SYMBOLS) | set(optional)
    return tuple(s for s in SYMBOLS if s in present)


def template_edges(name: str) -> List[Tuple[str, str]]:
    """Directed ``(parent, child)`` edges of template ``name``."""
    present = set(template_symbols(name))
    return [(parent, child) for parent, child in EDGES if parent in present and child in present]
