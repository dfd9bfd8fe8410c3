# Copyright 2024, Gurobi Optimization, LLC

import logging

from .engine import Sense
from .errors import InfeasibleSimilarity

logger = logging.getLogger(__name__)


def check_similarity(similarity, available):
    if similarity < 0:
        raise InfeasibleSimilarity(similarity, available, "it must not be negative")
    if similarity > available:
        raise InfeasibleSimilarity(similarity, available)


def add_similarity(model, baseline_edges, similarity):
    """Require at least `similarity` of the edges in `baseline_edges` (the
    edge set of a tour solved earlier) to be selected in `model`.

    A floor above the number of baseline edges could never be met and is
    rejected here, before any search starts.
    """
    baseline_edges = sorted(baseline_edges)
    check_similarity(similarity, len(baseline_edges))

    constr = model.engine.add_constraint(
        [model.vars[e] for e in baseline_edges],
        Sense.GREATER_EQUAL,
        similarity,
        name="similarity",
    )
    logger.info(
        "Similarity floor: at least %d of %d baseline edges", similarity, len(baseline_edges)
    )
    return constr
