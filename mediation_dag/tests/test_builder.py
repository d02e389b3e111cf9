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


import pytest

import mediation_dag as mdag

from mediation_dag.dag import builder


@pytest.fixture
def roles():
    return dict(outcome="Y", exposure="A", mediator=["M1", "M2"])


@pytest.mark.parametrize(
    "missing, kwargs",
    [
        ("outcome", dict(exposure="A", mediator=["M1"])),
        ("exposure", dict(outcome="Y", mediator=["M1"])),
        ("mediator", dict(outcome="Y", exposure="A")),
        ("mediator", dict(outcome="Y", exposure="A", mediator=[])),
        ("outcome", dict(outcome="", exposure="A", mediator="M")),
    ],
)
def test_missing_required_role(monkeypatch, missing, kwargs):
    def fail(*args, **kwargs):
        raise AssertionError("template selected")

    monkeypatch.setattr(builder, "select_template", fail)
    with pytest.raises(mdag.MissingRequiredRole, match="Unspecified") as err:
        mdag.build_mediation_dag(basec=["C"], **kwargs)
    assert err.value.roles == (missing,)
    assert isinstance(err.value, ValueError)


def test_all_roles_missing():
    with pytest.raises(mdag.MissingRequiredRole) as err:
        mdag.build_mediation_dag()
    assert err.value.roles == ("outcome", "exposure", "mediator")


def test_neither(roles):
    dag = mdag.build_mediation_dag(**roles)
    assert dag.template == "neither"
    assert dag.nodes == ("A", "M", "Y")
    assert len(dag.edges) == 3
    assert dag.caption_lines == (
        "A (exposure): A",
        "M (mediator): M1, M2",
        "Y (outcome): Y",
    )
    assert dag.caption == "A (exposure): A\nM (mediator): M1, M2\nY (outcome): Y"


def test_basec(roles):
    dag = mdag.build_mediation_dag(basec=["C1", "C2", "C3"], **roles)
    assert dag.template == "basec"
    assert set(dag.nodes) == {"A", "M", "Y", "C"}
    assert len(dag.edges) == 6
    assert ("C", "A") in dag.edges
    assert dag.caption_lines[-1] == "C (confounders not affected by the exposure): C1, C2, C3"


def test_postc(roles):
    dag = mdag.build_mediation_dag(postc=["L1", "L2"], **roles)
    assert dag.template == "postc"
    assert len(dag.nodes) == 4
    assert len(dag.edges) == 6
    assert ("A", "L") in dag.edges
    assert [line[0] for line in dag.caption_lines] == ["A", "M", "Y", "L"]
    assert dag.caption_lines[-1] == "L (confounders affected by the exposure): L1, L2"


def test_both(roles):
    dag = mdag.build_mediation_dag(postc=["L1", "L2"], basec=["C1", "C2", "C3"], **roles)
    assert dag.template == "both"
    assert len(dag.nodes) == 5
    assert len(dag.edges) == 9
    assert [line[0] for line in dag.caption_lines] == ["A", "M", "Y", "C", "L"]


@pytest.mark.parametrize("empty", [None, [], ()])
def test_empty_confounders_are_absent(roles, empty):
    dag = mdag.build_mediation_dag(basec=empty, postc=empty, **roles)
    assert dag.template == "neither"


def test_single_string_names():
    dag = mdag.build_mediation_dag(outcome="Y", exposure="A", mediator="M", basec="age")
    assert dag.bindings["M"].names == ("M",)
    assert dag.bindings["C"].names == ("age",)


def test_coordinates(roles):
    dag = mdag.build_mediation_dag(
        x_basec=10, y_basec=10, x_postc=-3, y_postc=-3, x_mediator=1.5, **roles
    )
    assert dag.coords == {"A": (0, 0), "M": (1.5, 1), "Y": (4, 0)}

    dag = mdag.build_mediation_dag(basec=["C1"], x_basec=10, y_basec=10, x_postc=-3, **roles)
    assert dag.coords["C"] == (10, 10)
    assert "L" not in dag.coords


def test_default_coordinates(roles):
    dag = mdag.build_mediation_dag(basec=["C1"], postc=["L1"], **roles)
    assert dag.coords == {
        "A": (0, 0),
        "M": (2, 1),
        "Y": (4, 0),
        "C": (2, 2),
        "L": (2, -0.5),
    }


def test_mediators_share_one_node(roles):
    dag = mdag.build_mediation_dag(**roles)
    assert dag.bindings["M"] == mdag.VariableBinding("M", ("M1", "M2"), (2, 1))


def test_caption_wrapping_keeps_names_in_order():
    names = ["mediator_one", "mediator-two", "m3", "a_very_long_variable_name"]
    dag = mdag.build_mediation_dag(outcome="Y", exposure="A", mediator=names, caption_width=10)
    line = dag.caption_lines[1]
    prefix, text = line.split(": ", 1)
    assert prefix == "M (mediator)"
    assert "\n" in text
    assert text.replace("\n", " ") == ", ".join(names)
    assert all(name in text.split("\n")[i] for i, name in enumerate(names))


def test_caption_not_wrapped_when_short(roles):
    dag = mdag.build_mediation_dag(basec=[f"C{i}" for i in range(5)], **roles)
    assert "\n" not in dag.caption_lines[-1]


@pytest.mark.parametrize("width", [0, -5])
def test_invalid_caption_width(roles, width):
    with pytest.raises(ValueError, match="invalid width"):
        mdag.build_mediation_dag(caption_width=width, **roles)


def test_float_caption_width(roles):
    dag = mdag.build_mediation_dag(caption_width=50.0, **roles)
    assert dag.caption_lines[1] == "M (mediator): M1, M2"


def test_idempotent(roles):
    first = mdag.build_mediation_dag(basec=["C1"], postc=["L1"], **roles)
    second = mdag.build_mediation_dag(basec=["C1"], postc=["L1"], **roles)
    assert first == second
    assert first is not second
    assert hash(first) == hash(second)


def test_dag_is_immutable(roles):
    dag = mdag.build_mediation_dag(basec=["C1"], **roles)
    assert isinstance(dag.variables, tuple)
    assert isinstance(dag.edges, tuple)
    assert isinstance(dag.caption_lines, tuple)
    with pytest.raises(AttributeError):
        dag.edges = ()
    dag.bindings.pop("C")
    assert "C" in dag.nodes


def test_to_frame(roles):
    frame = mdag.build_mediation_dag(**roles).to_frame()
    assert list(frame.columns) == ["name", "x", "y", "direction", "to", "xend", "yend"]
    assert len(frame) == 4
    edges = frame.dropna(subset=["to"])
    assert set(zip(edges["name"], edges["to"])) == {("A", "Y"), ("M", "Y"), ("A", "M")}
    sink = frame[frame["to"].isna()]
    assert sink["name"].tolist() == ["Y"]
    row = edges[(edges["name"] == "A") & (edges["to"] == "M")].iloc[0]
    assert (row["x"], row["y"], row["xend"], row["yend"]) == (0, 0, 2, 1)


def test_to_networkx(roles):
    graph = mdag.build_mediation_dag(basec=["C1", "C2"], postc=["L1"], **roles).to_networkx()
    assert graph.graph["template"] == "both"
    assert set(graph.nodes) == {"A", "M", "Y", "C", "L"}
    assert graph.number_of_edges() == 9
    assert graph.nodes["C"]["variables"] == ["C1", "C2"]
    assert graph.nodes["L"]["pos"] == (2, -0.5)
    assert graph.nodes["A"]["label"] == "exposure"
    assert list(graph.predecessors("A")) == ["C"]
