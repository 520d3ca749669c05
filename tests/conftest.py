"""Shared fixtures: sample ontology trees and sessions."""

import copy

import pytest

from chemoderma.explorer.session import ExplorerSession
from chemoderma.viz.layered import layered_layout

# Smallest tree exercising every rule: root -> therapy class -> phenotype
EXAMPLE_TREE = {
    "id": "root",
    "name": "R",
    "type": "root",
    "children": [
        {
            "id": "a",
            "name": "A",
            "type": "therapy_class",
            "children": [{"id": "b", "name": "B", "type": "phenotype"}],
        }
    ],
}

CHEMO_TREE = {
    "id": "root",
    "name": "ChemoDERMA",
    "type": "root",
    "children": [
        {
            "id": "cytotoxic",
            "name": "Cytotoxic chemotherapy",
            "type": "therapy_class",
            "children": [
                {
                    "id": "antimetabolites",
                    "name": "Antimetabolites",
                    "type": "drug_subclass",
                    "children": [
                        {
                            "id": "hfs",
                            "name": "Hand-foot syndrome",
                            "type": "phenotype",
                            "cut_id": "CUT-0012",
                            "incidence": "6-64%",
                            "tti": "2-12 weeks",
                            "management_prevention": "Dose reduction; urea cream",
                            "drug_examples": ["capecitabine", "5-fluorouracil"],
                        },
                        {
                            "id": "hyperpigmentation",
                            "name": "Hyperpigmentation",
                            "type": "phenotype",
                            "cut_id": "CUT-0031",
                            "drug_examples_raw": "capecitabine, tegafur",
                        },
                    ],
                },
            ],
        },
        {
            "id": "targeted",
            "name": "Targeted therapy",
            "type": "therapy_class",
            "children": [
                {
                    "id": "egfr",
                    "name": "EGFR inhibitors",
                    "type": "drug_subclass",
                    "children": [
                        {
                            "id": "papulopustular",
                            "name": "Papulopustular eruption",
                            "type": "phenotype",
                            "incidence": "up to 90%",
                        }
                    ],
                }
            ],
        },
    ],
}


@pytest.fixture
def example_tree():
    return copy.deepcopy(EXAMPLE_TREE)


@pytest.fixture
def chemo_tree():
    return copy.deepcopy(CHEMO_TREE)


def make_chain(depth: int) -> dict:
    """Linear tree root -> n1 -> ... -> n<depth>, built without recursion."""
    root = {"id": "root", "name": "root", "type": "root"}
    current = root
    for i in range(1, depth + 1):
        child = {"id": f"n{i}", "name": f"n{i}"}
        current["children"] = [child]
        current = child
    return root


@pytest.fixture
def session():
    """Session using the deterministic layered layout."""
    return ExplorerSession(layout_fn=layered_layout)
