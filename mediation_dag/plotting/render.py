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

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import daft
import graphviz as gr
import matplotlib.pyplot as plt

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from mediation_dag.dag.builder import MediationDAG

__all__ = ["MediationDAGPlot", "render_dag", "to_graphviz", "DEFAULT_CAPTION_SIZE"]

_log = logging.getLogger("mdag")

DEFAULT_CAPTION_SIZE = 10
# caption margin, inches
_CAPTION_PAD = 0.1
_LINE_SPACING = 1.4
# rough glyph width of the caption font, in units of its size
_CHAR_WIDTH = 0.6


@dataclass
class MediationDAGPlot:
    """A rendered mediation DAG.

    ``figure`` and ``ax`` can be used for further composition. ``rc`` holds the
    matplotlib settings the plot was rendered with; they are applied again, and only,
    while saving or showing.
    """

    dag: MediationDAG
    pgm: daft.PGM
    figure: Figure
    ax: Axes
    rc: Dict[str, Any] = field(default_factory=dict)

    def savefig(self, fname, **kwargs):
        kwargs.setdefault("bbox_inches", "tight")
        with plt.rc_context(self.rc):
            self.figure.savefig(fname, **kwargs)
        _log.info("Saved mediation DAG to %s", fname)

    def show(self):
        """Display the plot with :func:`matplotlib.pyplot.show`.

        Like any ``plt.show`` call this displays every open pyplot figure, not only this
        one; close other figures first to see the DAG alone.
        """
        with plt.rc_context(self.rc):
            plt.show()


def _add_caption(fig: Figure, ax: Axes, caption: str, caption_size: float):
    """Grow ``fig`` below ``ax`` and write ``caption`` there, left aligned and in italics."""
    lines = caption.split("\n")
    width, height = fig.get_size_inches()
    extra = len(lines) * caption_size * _LINE_SPACING / 72 + 2 * _CAPTION_PAD
    text_width = max(len(line) for line in lines) * caption_size * _CHAR_WIDTH / 72
    new_width = max(width, text_width + 2 * _CAPTION_PAD)
    new_height = height + extra

    fig.set_size_inches(new_width, new_height)
    ax.set_position(
        [
            (new_width - width) / 2 / new_width,
            extra / new_height,
            width / new_width,
            height / new_height,
        ]
    )
    return fig.text(
        _CAPTION_PAD / new_width,
        (extra - _CAPTION_PAD) / new_height,
        caption,
        ha="left",
        va="top",
        fontsize=caption_size,
        fontstyle="italic",
    )


def render_dag(
    dag: MediationDAG,
    caption_size: float = DEFAULT_CAPTION_SIZE,
    node_params: Optional[Dict[str, Any]] = None,
    edge_params: Optional[Dict[str, Any]] = None,
    rc: Optional[Dict[str, Any]] = None,
    **pgm_kwargs,
) -> MediationDAGPlot:
    """
    Draw a mediation DAG with daft.

    Parameters
    ----------
    dag : MediationDAG
        Output of :func:`mediation_dag.build_mediation_dag`.
    caption_size : float
        Font size in points of the caption.
    node_params : dict, optional
        matplotlib patch options for every node, e.g. ``dict(facecolor="k")``.
    edge_params : dict, optional
        matplotlib arrow options for every edge.
    rc : dict, optional
        matplotlib rc settings, e.g. ``{"text.usetex": True}``. They are only in effect
        while the figure is built, saved or shown.
    pgm_kwargs
        Passed to :class:`daft.PGM`, e.g. ``node_fc``, ``node_ec``, ``label_params``,
        ``grid_unit`` or ``dpi``.

    Returns
    -------
    MediationDAGPlot
    """
    rc = dict(rc or {})
    with plt.rc_context(rc):
        pgm = daft.PGM(**pgm_kwargs)
        for symbol, binding in dag.bindings.items():
            x, y = binding.coord
            pgm.add_node(symbol, symbol, x, y, plot_params=dict(node_params or {}))
        for parent, child in dag.edges:
            pgm.add_edge(parent, child, plot_params=dict(edge_params or {}))
        ax = pgm.render()
        fig = ax.figure
        # blank background
        ax.set_axis_off()
        fig.patch.set_facecolor("white")
        _add_caption(fig, ax, dag.caption, caption_size)
    _log.debug("Rendered %r mediation DAG", dag.template)
    return MediationDAGPlot(dag=dag, pgm=pgm, figure=fig, ax=ax, rc=rc)


def to_graphviz(dag: MediationDAG, caption_size: float = DEFAULT_CAPTION_SIZE, **graph_attr):
    """Graphviz version of the mediation DAG with node positions pinned to their coordinates."""
    attrs = {
        "layout": "neato",
        "label": "\\l".join(dag.caption.split("\n")) + "\\l",
        "labelloc": "b",
        "labeljust": "l",
        "fontsize": str(caption_size),
        "fontname": "Helvetica-Oblique",
    }
    attrs.update(graph_attr)
    g = gr.Digraph(graph_attr=attrs)
    for symbol, (x, y) in dag.coords.items():
        g.node(name=symbol, pos=f"{x},{y}!", shape="circle")
    for parent, child in dag.edges:
        g.edge(parent, child)
    return g
