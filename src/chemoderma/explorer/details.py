"""Phenotype detail-view payload."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chemoderma.graph.core import GraphNode

# (attribute, panel heading) in display order
DETAIL_SECTIONS = (
    ("cut_id", "CUTID"),
    ("incidence", "Incidence"),
    ("tti", "TTI (Time to Onset)"),
    ("management_prevention", "Management & Prevention"),
)


@dataclass(frozen=True)
class PhenotypeDetails:
    """Clinical attributes of one phenotype, as shown in the side panel.

    ``drug_examples`` holds the structured list when the dataset has one;
    otherwise ``drug_examples_raw`` carries the free-text form.
    """

    id: str
    name: str
    cut_id: str | None = None
    incidence: str | None = None
    tti: str | None = None
    management_prevention: str | None = None
    drug_examples: list[str] | None = None
    drug_examples_raw: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_node(cls, node: GraphNode) -> PhenotypeDetails:
        attrs = node.attributes
        examples = attrs.get("drug_examples")
        raw = attrs.get("drug_examples_raw")
        if isinstance(examples, str):
            raw = raw or examples
            examples = None
        elif examples is not None:
            examples = [str(e) for e in examples]
        return cls(
            id=node.id,
            name=attrs.get("name") or node.label,
            cut_id=_text(attrs.get("cut_id")),
            incidence=_text(attrs.get("incidence")),
            tti=_text(attrs.get("tti")),
            management_prevention=_text(attrs.get("management_prevention")),
            drug_examples=examples,
            drug_examples_raw=_text(raw),
            attributes=dict(attrs),
        )

    def sections(self) -> list[tuple[str, str | list[str]]]:
        """Non-empty (heading, value) pairs in panel order."""
        out: list[tuple[str, str | list[str]]] = []
        for attr, heading in DETAIL_SECTIONS:
            value = getattr(self, attr)
            if value:
                out.append((heading, value))
        if self.drug_examples:
            out.append(("Drug Examples", self.drug_examples))
        elif self.drug_examples_raw:
            out.append(("Drug Examples", self.drug_examples_raw))
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cut_id": self.cut_id,
            "incidence": self.incidence,
            "tti": self.tti,
            "management_prevention": self.management_prevention,
            "drug_examples": self.drug_examples,
            "drug_examples_raw": self.drug_examples_raw,
        }


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
