# Copyright 2024, Gurobi Optimization, LLC

# Two sequential solves over the same vertex set: the optimal tour under the
# first metric, then the optimal tour under the second metric that shares at
# least `similarity` edges with the first one.

import logging
from dataclasses import dataclass

from .callback import SubtourElimination
from .engine import GurobiEngine, SolveStatistics
from .errors import InfeasibleModel, InfeasibleSimilarity, InvalidParameter
from .graph import GraphModel
from .similarity import add_similarity, check_similarity
from .tour import shared_edges, tour_cost, tour_edges
from .vertex import Metric

logger = logging.getLogger(__name__)


@dataclass
class TourResult:
    tour: list
    cost1: int
    cost2: int
    statistics: SolveStatistics

    def cost(self, metric):
        return self.cost1 if metric is Metric.FIRST else self.cost2


@dataclass
class PairResult:
    vertices: tuple
    first: TourResult
    second: TourResult
    similarity: int = 0

    @property
    def tours(self):
        return self.first, self.second

    @property
    def shared(self):
        """Number of edges the two tours have in common."""
        return shared_edges(self.first.tour, self.second.tour)

    @property
    def statistics(self):
        return self.first.statistics + self.second.statistics


def _result(vertices, tour, stats):
    return TourResult(
        tour=tour,
        cost1=tour_cost(vertices, tour, Metric.FIRST),
        cost2=tour_cost(vertices, tour, Metric.SECOND),
        statistics=stats,
    )


def solve_tour(vertices, metric, engine, baseline=None, similarity=0):
    """Build and solve one model; returns (tour, statistics). The engine is
    left open, its owner closes it."""
    model = GraphModel(vertices, metric, engine)
    if baseline is not None:
        add_similarity(model, baseline, similarity)
    stats = model.solve(SubtourElimination(model))
    return model.tour(), stats


def solve_pair(vertices, similarity=0, engine_factory=GurobiEngine):
    """Solve the tour over the first metric, then the tour over the second
    metric sharing at least `similarity` edges with it."""
    if len(vertices) < 3:
        raise InvalidParameter(f"A tour needs at least 3 vertices, got {len(vertices)}.")
    check_similarity(similarity, len(vertices))

    with engine_factory() as engine:
        tour1, stats1 = solve_tour(vertices, Metric.FIRST, engine)
    first = _result(vertices, tour1, stats1)
    logger.info("First tour: cost1 %s, cost2 %s", first.cost1, first.cost2)

    with engine_factory() as engine:
        try:
            tour2, stats2 = solve_tour(
                vertices, Metric.SECOND, engine,
                baseline=tour_edges(tour1), similarity=similarity,
            )
        except InfeasibleSimilarity:
            raise
        except InfeasibleModel as err:
            raise InfeasibleSimilarity(
                similarity, len(vertices), "the second model is infeasible"
            ) from err
    second = _result(vertices, tour2, stats2)
    logger.info("Second tour: cost1 %s, cost2 %s", second.cost1, second.cost2)

    return PairResult(vertices, first, second, similarity)
