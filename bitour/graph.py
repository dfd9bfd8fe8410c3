# Copyright 2024, Gurobi Optimization, LLC

# Base MIP model of a dense symmetric TSP over one cost metric:
#
#   min  sum_ij d_ij x_ij
#   s.t. sum_j x_ij == 2   forall i in V
#        x_ij binary       forall (i,j) in E
#
# Integral solutions of this model may still contain subtours; they are cut
# off during the search by the callback handed to GraphModel.solve.

import logging
from itertools import combinations

from .engine import Sense, SolveStatus
from .errors import (
    IncompleteTour,
    InfeasibleModel,
    NoIntegralSolution,
    SearchStopped,
    SolveTimeout,
)
from .tour import adjacency, min_cycle

logger = logging.getLogger(__name__)


class GraphModel:
    def __init__(self, vertices, metric, engine):
        self.vertices = vertices
        self.metric = metric
        self.engine = engine
        self.vars = self._add_vars()
        self._add_degree_constraints()
        logger.info(
            "Model over %s built: %d vertices, %d edge variables",
            metric.name, self.order, self.size,
        )

    @property
    def order(self):
        """Number of vertices."""
        return len(self.vertices)

    @property
    def size(self):
        """Number of edges."""
        return self.order * (self.order - 1) // 2

    def pairs(self):
        return combinations(range(self.order), 2)

    def _add_vars(self):
        # Store both (i, j) and (j, i) keys for the same variable.
        x = {}
        terms = []
        for i, j in self.pairs():
            u, v = self.vertices[i], self.vertices[j]
            cost = self.metric.cost(u, v)
            x_ij = self.engine.add_binary_var(f"x_{u.id}_{v.id}")
            x[i, j] = x[j, i] = x_ij
            terms.append((cost, x_ij))
        self.engine.set_objective(terms)
        return x

    def _add_degree_constraints(self):
        for i in range(self.order):
            self.engine.add_constraint(
                [self.vars[i, j] for j in range(self.order) if i != j],
                Sense.EQUAL,
                2,
                name=f"deg_{self.vertices[i].id}",
            )

    def solve(self, callback=None):
        """Optimize with `callback` (a SubtourElimination) inspecting every
        integral candidate and return the engine's statistics."""
        status = self.engine.optimize(callback)
        stats = self.engine.statistics()
        if callback is not None:
            stats.lazy_cuts = callback.cuts

        if status is SolveStatus.INFEASIBLE:
            raise InfeasibleModel(f"Model over {self.metric.name} is infeasible.")
        if stats.solutions <= 0:
            raise NoIntegralSolution(self.vertices)
        if status is SolveStatus.TIMEOUT:
            raise SolveTimeout(f"Solver stopped on its time limit after {stats.elapsed:.2f} secs.")
        if status is not SolveStatus.SOLVED:
            raise SearchStopped("Search was interrupted before optimality was proven.")

        logger.info(
            "Model over %s solved: objective %s, %d solution(s), %.3f secs",
            self.metric.name, stats.objective, stats.solutions, stats.elapsed,
        )
        return stats

    def edges(self):
        pairs = list(self.pairs())
        values = self.engine.values(self.vars[p] for p in pairs)
        return [p for p, value in zip(pairs, values) if value > 0.5]

    def tour(self):
        """The solution as a list of vertex indices. It must visit every
        vertex; anything shorter means the cuts failed to do their job."""
        tour = min_cycle(adjacency(self.edges(), self.order))
        if len(tour) != self.order:
            raise IncompleteTour(self.vertices, [self.vertices[i] for i in tour])
        return tour

    def solution(self):
        return [self.vertices[i] for i in self.tour()]
