"""Explorer session and interaction handling."""

from chemoderma.explorer.details import PhenotypeDetails
from chemoderma.explorer.interaction import DetailState, InteractionDispatcher
from chemoderma.explorer.session import ExplorerSession, SessionStatus

__all__ = [
    "DetailState",
    "ExplorerSession",
    "InteractionDispatcher",
    "PhenotypeDetails",
    "SessionStatus",
]
