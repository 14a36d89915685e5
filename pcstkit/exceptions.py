"""Input validation failures raised by the PCST solvers."""


class PCSTError(ValueError):
    """Base class for rejected solver input."""


class InvalidRootError(PCSTError):
    """The requested root is not a node of the graph."""

    def __init__(self, node):
        self.node = node
        super().__init__(f"root {node!r} is not a node of the graph")


class InvalidPrizeError(PCSTError):
    """A prize is negative or not a finite number."""

    def __init__(self, node, prize):
        self.node = node
        self.prize = prize
        super().__init__(f"prize for node {node!r} must be finite and non-negative, got {prize!r}")


class InvalidEdgeCostError(PCSTError):
    """An edge cost is negative or not a finite number."""

    def __init__(self, edge, cost):
        self.edge = edge
        self.cost = cost
        super().__init__(f"cost of edge {edge!r} must be finite and non-negative, got {cost!r}")
