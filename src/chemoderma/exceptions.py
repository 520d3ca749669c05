"""Exceptions for the ChemoDERMA disclosure graph engine."""

from __future__ import annotations


class MalformedTreeError(Exception):
    """Source tree is structurally invalid.

    Raised once at load time by the flattener. Graph construction halts and
    any previously loaded graph stays in place.

    Attributes:
        path: Location of the offending node (e.g. ``root.children[2]``)
        reason: What is wrong with it
        message: Human-readable error message
    """

    def __init__(
        self,
        path: str,
        reason: str,
        message: str | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        return f"Malformed tree at {self.path}: {self.reason}"


class DatasetLoadError(Exception):
    """Dataset could not be fetched or parsed.

    The session stays in the awaiting-data state. There is no retry.

    Attributes:
        source: Path or URL that was being loaded
        reason: Short description of the failure
        message: Human-readable error message
    """

    def __init__(
        self,
        source: str,
        reason: str,
        message: str | None = None,
    ) -> None:
        self.source = source
        self.reason = reason
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        return f"Could not load dataset from '{self.source}': {self.reason}"


class StaleReferenceWarning(UserWarning):
    """A click or lookup referenced a node id that is not in the current graph.

    Emitted with ``warnings.warn`` and recovered locally as a no-op.
    """
