__version__ = "0.1.0"

import logging

_log = logging.getLogger("mdag")

if not logging.root.handlers:
    _log.setLevel(logging.INFO)
    if len(_log.handlers) == 0:
        handler = logging.StreamHandler()
        _log.addHandler(handler)


from mediation_dag import dag, plotting
from mediation_dag.draw import cmdag, render_mediation_dag
from mediation_dag.dag import MediationDAG, VariableBinding, build_mediation_dag
from mediation_dag.exceptions import MissingRequiredRole
from mediation_dag.plotting import MediationDAGPlot, render_dag, to_graphviz
