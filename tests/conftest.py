# Copyright 2024, Gurobi Optimization, LLC

import random

import pytest

from bitour.engine import Candidate, Engine, SolveStatistics, SolveStatus
from bitour.vertex import VertexSet


def edge_name(i, j):
    i, j = min(i, j), max(i, j)
    return f"x_{i}_{j}"


def ring(nodes):
    """Edges of the cycle visiting `nodes` in order."""
    return [(u, v) for u, v in zip(nodes, nodes[1:] + nodes[:1])]


class RecordingEngine(Engine):
    """Engine that records the model instead of solving it. Variables are
    their own names; `solution` holds the index pairs set to one."""

    def __init__(self, status=SolveStatus.SOLVED, solution=(), solutions=1):
        self.vars = []
        self.constraints = []
        self.objective = None
        self.callback = None
        self.status = status
        self.selected = {edge_name(i, j) for i, j in solution}
        self.solutions = solutions
        self.closed = False

    def add_binary_var(self, name):
        self.vars.append(name)
        return name

    def add_constraint(self, variables, sense, rhs, name=""):
        constr = (list(variables), sense, rhs, name)
        self.constraints.append(constr)
        return constr

    def set_objective(self, terms):
        self.objective = list(terms)

    def optimize(self, callback=None):
        self.callback = callback
        return self.status

    def values(self, variables):
        return [1.0 if v in self.selected else 0.0 for v in variables]

    def statistics(self):
        return SolveStatistics(
            variables=len(self.vars),
            linear_constraints=len(self.constraints),
            iterations=7,
            elapsed=0.5,
            solutions=self.solutions,
            objective=0.0 if self.solutions else None,
        )

    def close(self):
        self.closed = True


class FakeCandidate(Candidate):
    def __init__(self, edges):
        self.selected = {edge_name(i, j) for i, j in edges}
        self.lazy = []

    def values(self, variables):
        return [1.0 if v in self.selected else 0.0 for v in variables]

    def add_lazy(self, variables, sense, rhs):
        self.lazy.append((list(variables), sense, rhs))


def random_vertices(count, seed=7):
    rng = random.Random(seed)
    return VertexSet.from_records(
        tuple(float(rng.randint(0, 100)) for _ in range(4)) for _ in range(count)
    )


@pytest.fixture
def square():
    # Unit square under the first metric, a stretched one under the second.
    return VertexSet.from_records(
        [
            (0, 0, 0, 0),
            (0, 1, 0, 3),
            (1, 1, 3, 3),
            (1, 0, 3, 0),
        ]
    )


@pytest.fixture
def hexagon():
    return VertexSet.from_records(
        [
            (0, 0, 5, 5),
            (1, 0, 4, 5),
            (2, 1, 3, 4),
            (1, 2, 2, 3),
            (0, 2, 1, 2),
            (-1, 1, 0, 1),
        ]
    )
