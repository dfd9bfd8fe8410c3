# Copyright 2024, Gurobi Optimization, LLC

# Lazy subtour elimination. Every integral candidate the engine proposes is
# decomposed into cycles; if the shortest one misses some vertex, the DFJ
# constraint over its vertex set is added and the candidate is rejected.

import logging
import threading
from itertools import combinations

from .engine import Sense
from .tour import adjacency, min_cycle

logger = logging.getLogger(__name__)


class SubtourElimination:
    """Callback class implementing lazy constraints for the TSP. Candidates
    are checked for subtours and subtour elimination constraints are added
    if needed. Only the candidate it is given is read, so it may be called
    from several solver threads at once."""

    def __init__(self, model):
        self.order = model.order
        self.x = model.vars
        self.pairs = list(model.pairs())
        self.cuts = 0
        self._lock = threading.Lock()

    def __call__(self, candidate):
        return self.on_candidate(candidate)

    def on_candidate(self, candidate):
        """Return True when the candidate is a complete tour. Otherwise add a
        subtour elimination constraint through the candidate and return
        False."""
        values = candidate.values(self.x[p] for p in self.pairs)
        edges = [p for p, value in zip(self.pairs, values) if value > 0.5]
        tour = min_cycle(adjacency(edges, self.order))

        if len(tour) == self.order:
            logger.debug("Candidate accepted as a complete tour")
            return True

        # add subtour elimination constraint for every pair of cities in tour
        candidate.add_lazy(
            [self.x[i, j] for i, j in combinations(tour, 2)],
            Sense.LESS_EQUAL,
            len(tour) - 1,
        )
        with self._lock:
            self.cuts += 1
        logger.debug("Subtour of %d vertices cut off: %s", len(tour), tour)
        return False
