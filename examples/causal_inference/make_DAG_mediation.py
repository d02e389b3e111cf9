import matplotlib.pyplot as plt

import mediation_dag as mdag

confounders = {
    "neither": dict(),
    "basec": dict(basec=["C1", "C2", "C3"]),
    "postc": dict(postc=["L1", "L2"]),
    "both": dict(basec=["C1", "C2", "C3"], postc=["L1", "L2"]),
}

for name, kwargs in confounders.items():
    plot = mdag.cmdag(
        outcome="Y",
        exposure="A",
        mediator=["M1", "M2"],
        show=False,
        node_fc="k",
        label_params={"color": "w"},
        **kwargs,
    )
    plot.savefig(f"DAG_mediation_{name}.png", dpi=500)
    plt.close(plot.figure)
