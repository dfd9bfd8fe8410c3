# Copyright 2024, Gurobi Optimization, LLC

# Exact minimum-cost tours under two cost metrics, the second one sharing a
# minimum number of edges with the first, solved with lazy subtour
# elimination constraints.

from .callback import SubtourElimination
from .engine import Candidate, Engine, GurobiEngine, Sense, SolveStatistics, SolveStatus
from .errors import (
    BitourError,
    EngineError,
    IncompleteTour,
    InfeasibleModel,
    InfeasibleSimilarity,
    InsufficientPopulation,
    InvalidInputFile,
    InvalidParameter,
    InvalidSolution,
    NoIntegralSolution,
    SearchStopped,
    SolveTimeout,
)
from .graph import GraphModel
from .pipeline import PairResult, TourResult, solve_pair
from .similarity import add_similarity
from .tour import adjacency, cycles, min_cycle, shared_edges, tour_cost, tour_edges
from .vertex import Metric, Vertex, VertexSet, read_records, sample

__version__ = "0.1.0"
