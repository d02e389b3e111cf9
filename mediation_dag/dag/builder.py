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


import logging
import textwrap

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Sequence, Tuple, Union

import networkx as nx
import pandas as pd

from mediation_dag.dag.templates import (
    ROLE_LABELS,
    select_template,
    template_edges,
    template_symbols,
)
from mediation_dag.exceptions import MissingRequiredRole

__all__ = [
    "DEFAULT_CAPTION_WIDTH",
    "VariableBinding",
    "MediationDAG",
    "build_mediation_dag",
    "caption_line",
]

_log = logging.getLogger("mdag")

Names = Union[str, Sequence[str]]
Coord = Tuple[float, float]

DEFAULT_CAPTION_WIDTH = 50


class VariableBinding(NamedTuple):
    """Variable name(s) bound to a DAG symbol and the point the symbol is drawn at."""

    symbol: str
    names: Tuple[str, ...]
    coord: Coord


def _as_names(value: Optional[Names]) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    return tuple(value)


def caption_line(symbol: str, names: Sequence[str], width: int = DEFAULT_CAPTION_WIDTH) -> str:
    """Caption line ``"<symbol> (<role>): <names>"`` with names wrapped to ``width`` columns.

    Names are comma joined in the given order. Words longer than ``width`` and
    hyphenated names are kept whole; wrapping never reorders or drops a name.
    """
    text = textwrap.fill(
        ", ".join(names), width=width, break_long_words=False, break_on_hyphens=False
    )
    return f"{symbol} ({ROLE_LABELS[symbol]}): {text}"


@dataclass(frozen=True)
class MediationDAG:
    """Structure, layout and caption of a causal mediation DAG.

    Parameters
    ----------
    template : str
        One of ``"neither"``, ``"basec"``, ``"postc"`` or ``"both"``.
    variables : tuple of VariableBinding
        One binding per drawn symbol, in ``A, M, Y, C, L`` order.
    edges : tuple of tuple
        Directed ``(parent, child)`` symbol pairs.
    caption_lines : tuple of str
        One line per drawn symbol, in ``A, M, Y, C, L`` order.
    """

    template: str
    variables: Tuple[VariableBinding, ...]
    edges: Tuple[Tuple[str, str], ...]
    caption_lines: Tuple[str, ...] = ()

    @property
    def bindings(self) -> Dict[str, VariableBinding]:
        return {binding.symbol: binding for binding in self.variables}

    @property
    def nodes(self) -> Tuple[str, ...]:
        return tuple(binding.symbol for binding in self.variables)

    @property
    def coords(self) -> Dict[str, Coord]:
        return {symbol: binding.coord for symbol, binding in self.bindings.items()}

    @property
    def caption(self) -> str:
        return "\n".join(self.caption_lines)

    def to_frame(self) -> pd.DataFrame:
        """Tidy representation with one row per edge.

        Nodes without children get a single row with missing ``to``/``xend``/``yend``.
        """
        coords = self.coords
        rows = []
        for symbol in self.nodes:
            x, y = coords[symbol]
            children = [child for parent, child in self.edges if parent == symbol]
            if not children:
                rows.append(dict(name=symbol, x=x, y=y, direction=None, to=None, xend=None, yend=None))
            for child in children:
                xend, yend = coords[child]
                rows.append(
                    dict(name=symbol, x=x, y=y, direction="->", to=child, xend=xend, yend=yend)
                )
        return pd.DataFrame(rows, columns=["name", "x", "y", "direction", "to", "xend", "yend"])

    def to_networkx(self) -> nx.DiGraph:
        graph = nx.DiGraph(template=self.template)
        for symbol, binding in self.bindings.items():
            graph.add_node(
                symbol,
                pos=binding.coord,
                label=ROLE_LABELS[symbol],
                variables=list(binding.names),
            )
        graph.add_edges_from(self.edges)
        return graph


def build_mediation_dag(
    outcome: Optional[str] = None,
    exposure: Optional[str] = None,
    mediator: Optional[Names] = None,
    basec: Optional[Names] = None,
    postc: Optional[Names] = None,
    x_outcome: float = 4,
    x_exposure: float = 0,
    x_mediator: float = 2,
    x_basec: float = 2,
    x_postc: float = 2,
    y_outcome: float = 0,
    y_exposure: float = 0,
    y_mediator: float = 1,
    y_basec: float = 2,
    y_postc: float = -0.5,
    caption_width: int = DEFAULT_CAPTION_WIDTH,
) -> MediationDAG:
    """
    Build the DAG of a causal mediation analysis without drawing it.

    Parameters
    ----------
    outcome : str
        Variable name of the outcome.
    exposure : str
        Variable name of the exposure.
    mediator : str or sequence of str
        Variable name(s) of the mediator(s).
    basec : str or sequence of str, optional
        Variable name(s) of the exposure-outcome, exposure-mediator and mediator-outcome
        confounders not affected by the exposure.
    postc : str or sequence of str, optional
        Variable name(s) of the mediator-outcome confounders affected by the exposure.
    x_outcome, x_exposure, x_mediator, x_basec, x_postc : float
        x coordinates of the variable groups. All variables of a group share one node.
    y_outcome, y_exposure, y_mediator, y_basec, y_postc : float
        y coordinates of the variable groups.
    caption_width : int
        Line width in characters of the caption.

    Returns
    -------
    MediationDAG

    Raises
    ------
    MissingRequiredRole
        If outcome, exposure or mediator is not given.
    ValueError
        If ``caption_width`` is not positive, from :func:`textwrap.fill`.
    """
    names = {
        "A": _as_names(exposure),
        "M": _as_names(mediator),
        "Y": _as_names(outcome),
        "C": _as_names(basec),
        "L": _as_names(postc),
    }
    missing = [
        role
        for role, symbol in (("outcome", "Y"), ("exposure", "A"), ("mediator", "M"))
        if not names[symbol]
    ]
    if missing:
        raise MissingRequiredRole(missing)

    template = select_template(bool(names["C"]), bool(names["L"]))
    coords = {
        "A": (x_exposure, y_exposure),
        "M": (x_mediator, y_mediator),
        "Y": (x_outcome, y_outcome),
        "C": (x_basec, y_basec),
        "L": (x_postc, y_postc),
    }
    symbols = template_symbols(template)
    variables = tuple(VariableBinding(s, names[s], coords[s]) for s in symbols)
    edges = tuple(template_edges(template))
    caption_lines = tuple(caption_line(s, names[s], caption_width) for s in symbols)
    _log.debug("Built %r mediation DAG with %d nodes and %d edges", template, len(symbols), len(edges))
    return MediationDAG(
        template=template, variables=variables, edges=edges, caption_lines=caption_lines
    )
