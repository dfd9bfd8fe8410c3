# Copyright 2024, Gurobi Optimization, LLC

# Exceptions raised while reading input, building models and checking the
# solutions found by the solver.


class BitourError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputFile(BitourError, ValueError):
    def __init__(self, filename, reason):
        super().__init__(f'File "{filename}" {reason}.')
        self.filename = filename

    @classmethod
    def empty_or_missing(cls, filename):
        return cls(filename, "is empty or missing")

    @classmethod
    def invalid_data(cls, filename, lineno):
        return cls(filename, f"contains invalid data at line {lineno}")


class InsufficientPopulation(BitourError, ValueError):
    def __init__(self, available, requested):
        super().__init__(
            f"Not enough vertices, requesting {requested} out of {available} available."
        )
        self.available = available
        self.requested = requested


class InvalidParameter(BitourError, ValueError):
    pass


class InvalidSolution(BitourError):
    """A finished search did not produce a usable tour. Carries the vertex
    set of the model and, when one was found, the offending subtour."""

    def __init__(self, message, vertices, subtour=None):
        super().__init__(message)
        self.vertices = list(vertices)
        self.subtour = subtour


class NoIntegralSolution(InvalidSolution):
    def __init__(self, vertices):
        super().__init__("No integral solution could be found.", vertices)


class IncompleteTour(InvalidSolution):
    def __init__(self, vertices, subtour):
        super().__init__(
            "Solution found, but leads to incomplete tour.", vertices, list(subtour)
        )


class InfeasibleModel(BitourError):
    pass


class InfeasibleSimilarity(InfeasibleModel):
    def __init__(self, similarity, available, reason=None):
        if reason is None:
            reason = f"at most {available} edges can be shared"
        super().__init__(
            f"Cannot share {similarity} edges with the first tour: {reason}."
        )
        self.similarity = similarity
        self.available = available


class SearchStopped(BitourError):
    """The search ended before optimality was proven."""


class SolveTimeout(SearchStopped):
    pass


class EngineError(BitourError):
    """Solver-level failure, reported with the engine's own code."""

    def __init__(self, code, message):
        super().__init__(f"code {code}, {message}")
        self.code = code
        self.message = message
