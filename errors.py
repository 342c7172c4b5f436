"""
Exception taxonomy for campus_routing.

Container and graph errors signal a caller contract violation and always
propagate. Path-query errors signal that no route (or no shared meeting
point) exists between nodes that are themselves valid.
"""


class NullKeyError(ValueError):
    """A required key argument was None."""


class DuplicateKeyError(ValueError):
    """Insertion of a key that is already present."""


class DuplicateNodeError(DuplicateKeyError):
    """Insertion of a node identifier that is already in the graph."""


class KeyNotFoundError(KeyError):
    """
    Lookup or removal of an absent key.

    Subclasses KeyError so callers can catch it the usual way, but keeps the
    plain message in str() instead of KeyError's quoted repr.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class NodeNotFoundError(KeyNotFoundError):
    """Reference to a node identifier that is not in the graph."""


class EdgeNotFoundError(KeyNotFoundError):
    """Reference to a directed edge that is not in the graph."""


class NoPathFoundError(LookupError):
    """No directed route exists between two existing nodes."""


class NoCommonDestinationError(LookupError):
    """No single node is reachable from every supplied start."""
