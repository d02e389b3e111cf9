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


from typing import Any, Dict, Optional

from mediation_dag.dag.builder import DEFAULT_CAPTION_WIDTH, Names, build_mediation_dag
from mediation_dag.plotting.render import DEFAULT_CAPTION_SIZE, MediationDAGPlot, render_dag

__all__ = ["cmdag", "render_mediation_dag"]


def cmdag(
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
    caption_size: float = DEFAULT_CAPTION_SIZE,
    show: bool = True,
    filename=None,
    rc: Optional[Dict[str, Any]] = None,
    node_params: Optional[Dict[str, Any]] = None,
    edge_params: Optional[Dict[str, Any]] = None,
    **kwargs,
) -> MediationDAGPlot:
    """
    Plot the directed acyclic graph (DAG) for causal mediation analysis.

    The exposure ``A``, the mediator(s) ``M`` and the outcome ``Y`` are always drawn.
    Baseline confounders ``C`` affect ``A``, ``M`` and ``Y``; post-exposure confounders
    ``L`` are affected by ``A`` and affect ``M`` and ``Y``. A caption lists the variables
    behind every symbol.

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
        x coordinates. Defaults are 4, 0, 2, 2 and 2.
    y_outcome, y_exposure, y_mediator, y_basec, y_postc : float
        y coordinates. Defaults are 0, 0, 1, 2 and -0.5.
    caption_width : int
        Line width in characters of the caption. Default is 50.
    caption_size : float
        Text size in pts of the caption. Default is 10.
    show : bool
        Display the plot with :func:`matplotlib.pyplot.show`.
    filename : str or path-like, optional
        Save the plot to this file before displaying it.
    rc : dict, optional
        matplotlib rc settings in effect while drawing, saving and showing.
    node_params, edge_params : dict, optional
        matplotlib options for the node patches and edge arrows.
    kwargs
        Passed to :class:`daft.PGM`, see :func:`mediation_dag.plotting.render_dag`.

    Returns
    -------
    MediationDAGPlot

    Examples
    --------
    >>> import mediation_dag as mdag
    >>> plot = mdag.cmdag(outcome="Y", exposure="A", mediator=["M1", "M2"],
    ...                   basec=["C1", "C2", "C3"], postc=["L1", "L2"], show=False)
    >>> plot.dag.template
    'both'
    """
    dag = build_mediation_dag(
        outcome=outcome,
        exposure=exposure,
        mediator=mediator,
        basec=basec,
        postc=postc,
        x_outcome=x_outcome,
        x_exposure=x_exposure,
        x_mediator=x_mediator,
        x_basec=x_basec,
        x_postc=x_postc,
        y_outcome=y_outcome,
        y_exposure=y_exposure,
        y_mediator=y_mediator,
        y_basec=y_basec,
        y_postc=y_postc,
        caption_width=caption_width,
    )
    plot = render_dag(
        dag,
        caption_size=caption_size,
        node_params=node_params,
        edge_params=edge_params,
        rc=rc,
        **kwargs,
    )
    if filename is not None:
        plot.savefig(filename)
    if show:
        plot.show()
    return plot


render_mediation_dag = cmdag
