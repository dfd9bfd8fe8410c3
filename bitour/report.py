# Copyright 2024, Gurobi Optimization, LLC


def format_report(result, seed=None, show_tours=False):
    """Human-readable summary of a solved pair of tours."""
    n = len(result.vertices)
    stats = result.statistics

    header = f"Graph(n={n},m={n * (n - 1) // 2})"
    if seed is not None:
        header += f", chosen with seed 0x{seed:x}"

    lines = [
        header,
        f"Found {stats.solutions} solution(s).",
        f"Iterations: {stats.iterations}",
        f"Execution time: {stats.elapsed:.3f} secs",
        f"Variables: {stats.variables}",
        f"Constraints: {stats.constraints}",
        f"    Linear: {stats.linear_constraints}",
        f"    Quadratic: {stats.quadratic_constraints}",
        f"Lazy cuts: {stats.lazy_cuts}",
        f"Similarity: {result.shared} shared edge(s), at least {result.similarity} required",
    ]
    for number, tour in enumerate(result.tours, start=1):
        lines.append(
            f"Tour {number}: total cost {tour.cost1} (metric 1), {tour.cost2} (metric 2)"
        )
        lines.append(f"    Objective cost: {tour.statistics.objective:g}")
        if show_tours:
            lines.extend(str(result.vertices[i]) for i in tour.tour)
    return "\n".join(lines)


def format_subtour(vertices):
    return " ".join(str(v) for v in vertices)