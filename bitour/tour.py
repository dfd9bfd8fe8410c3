# Copyright 2024, Gurobi Optimization, LLC

# Cycle decomposition of integral solutions. Once the degree-2 constraints
# hold, the selected edges form a disjoint union of simple cycles; following
# them from any vertex walks one cycle, and repeating from the remaining
# vertices enumerates all of them.


def adjacency(edges, order):
    """Map every vertex index in range(order) to the sorted list of its
    selected neighbours."""
    neighbors = [[] for _ in range(order)]
    for i, j in edges:
        neighbors[i].append(j)
        neighbors[j].append(i)
    for row in neighbors:
        row.sort()
    return neighbors


def cycles(neighbors):
    """Yield every cycle found by following the selected edges. Each walk
    starts at the lowest unvisited vertex and always moves to the first
    unvisited neighbour. It is assumed that every vertex has exactly two
    neighbours."""
    seen = [False] * len(neighbors)
    for start in range(len(neighbors)):
        if seen[start]:
            continue
        cycle = []
        current = start
        while current is not None:
            seen[current] = True
            cycle.append(current)
            current = next((j for j in neighbors[current] if not seen[j]), None)
        yield cycle


def min_cycle(neighbors):
    """Return the shortest cycle (as a list of vertex indices), the first
    one found on ties. A complete tour is the only cycle when it exists."""
    shortest = []
    for cycle in cycles(neighbors):
        if not shortest or len(cycle) < len(shortest):
            shortest = cycle
    return shortest


def tour_edges(tour):
    """Set of the tour's edges as (low, high) index pairs."""
    return {
        (min(u, v), max(u, v)) for u, v in zip(tour, tour[1:] + tour[:1]) if u != v
    }


def shared_edges(tour1, tour2):
    return len(tour_edges(tour1) & tour_edges(tour2))


def tour_cost(vertices, tour, metric):
    """Total cost of the closed walk through `tour` under `metric`."""
    return sum(
        metric.cost(vertices[u], vertices[v]) for u, v in zip(tour, tour[1:] + tour[:1])
    )
