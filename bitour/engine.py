# Copyright 2024, Gurobi Optimization, LLC

# The integer-programming capability the tour models are built on. Models
# only talk to the abstract Engine and Candidate interfaces below; the
# GurobiEngine binds them to gurobipy.

import abc
import contextlib
import enum
import logging
import time
from dataclasses import dataclass, fields
from typing import Optional

import gurobipy as gp
from gurobipy import GRB

from .errors import EngineError

logger = logging.getLogger(__name__)


class Sense(enum.Enum):
    EQUAL = "=="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="


class SolveStatus(enum.Enum):
    SOLVED = "solved"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"
    INTERRUPTED = "interrupted"


@dataclass
class SolveStatistics:
    variables: int = 0
    linear_constraints: int = 0
    quadratic_constraints: int = 0
    iterations: int = 0
    elapsed: float = 0.0
    solutions: int = 0
    lazy_cuts: int = 0
    objective: Optional[float] = None

    @property
    def constraints(self):
        return self.linear_constraints + self.quadratic_constraints

    def __add__(self, other):
        """Field-wise sum; the objectives of different models are not
        comparable, so the sum has none."""
        summed = {
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
            if f.name != "objective"
        }
        return SolveStatistics(**summed)


class Candidate(abc.ABC):
    """An integer-feasible assignment proposed by the engine during search."""

    @abc.abstractmethod
    def values(self, variables):
        """Values of `variables` in this candidate, in the same order."""

    @abc.abstractmethod
    def add_lazy(self, variables, sense, rhs):
        """Reject this candidate, adding `sum(variables) <sense> rhs` to the
        model for the rest of the search."""


class Engine(abc.ABC):
    """Capabilities required from an integer-program solver. All constraint
    coefficients are one; only the objective is weighted."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @abc.abstractmethod
    def add_binary_var(self, name):
        pass

    @abc.abstractmethod
    def add_constraint(self, variables, sense, rhs, name=""):
        pass

    @abc.abstractmethod
    def set_objective(self, terms):
        """Minimize the sum of `coefficient * variable` over (coefficient,
        variable) pairs."""

    @abc.abstractmethod
    def optimize(self, callback=None):
        """Search to optimality, calling `callback(candidate)` on every
        integer-feasible candidate. Returns a SolveStatus."""

    @abc.abstractmethod
    def values(self, variables):
        """Values of `variables` in the final solution."""

    @abc.abstractmethod
    def statistics(self):
        pass

    def close(self):
        pass


_SENSES = {
    Sense.EQUAL: GRB.EQUAL,
    Sense.LESS_EQUAL: GRB.LESS_EQUAL,
    Sense.GREATER_EQUAL: GRB.GREATER_EQUAL,
}

# Only a proven optimum counts as solved; SUBOPTIMAL and the other early
# stops fall through to INTERRUPTED.
_STATUSES = {
    GRB.OPTIMAL: SolveStatus.SOLVED,
    GRB.INFEASIBLE: SolveStatus.INFEASIBLE,
    GRB.INF_OR_UNBD: SolveStatus.INFEASIBLE,
    GRB.TIME_LIMIT: SolveStatus.TIMEOUT,
}


def solve_status(code):
    """SolveStatus of a Gurobi optimization status code."""
    return _STATUSES.get(code, SolveStatus.INTERRUPTED)


@contextlib.contextmanager
def engine_errors():
    """Re-raise gurobipy failures as EngineError, keeping Gurobi's code."""
    try:
        yield
    except gp.GurobiError as err:
        raise EngineError(err.errno, err.message) from err


def quiet_env(seed=None, threads=None, output=False):
    """Gurobi environment with lazy constraints enabled and, unless asked
    for, no solver log."""
    with engine_errors():
        env = gp.Env(empty=True)
        env.setParam("OutputFlag", 1 if output else 0)
        env.setParam("LazyConstraints", 1)
        if seed is not None:
            env.setParam("Seed", seed & 0x0FFFFFFF)
        if threads:
            env.setParam("Threads", threads)
        env.start()
    return env


class GurobiCandidate(Candidate):
    def __init__(self, model):
        self.model = model

    def values(self, variables):
        return self.model.cbGetSolution(list(variables))

    def add_lazy(self, variables, sense, rhs):
        self.model.cbLazy(gp.quicksum(variables), _SENSES[sense], rhs)


class MIPSolCallback:
    """Callback class forwarding every new integer solution (MIPSOL) to a
    candidate handler. Stop the optimization if there is an exception in
    user code; the exception is kept so it can be raised again once the
    search has returned."""

    def __init__(self, handler):
        self.handler = handler
        self.error = None

    def __call__(self, model, where):
        if where == GRB.Callback.MIPSOL:
            try:
                self.handler(GurobiCandidate(model))
            except Exception as err:
                logger.exception("Exception occurred in MIPSOL callback")
                if self.error is None:
                    self.error = err
                model.terminate()


class GurobiEngine(Engine):
    def __init__(self, seed=None, threads=None, output=False, env=None):
        self._owns_env = env is None
        if env is None:
            env = quiet_env(seed=seed, threads=threads, output=output)
        self.env = env
        try:
            with engine_errors():
                self.model = gp.Model(env=self.env)
        except EngineError:
            if self._owns_env:
                self.env.dispose()
            raise
        self.elapsed = 0.0

    def add_binary_var(self, name):
        with engine_errors():
            return self.model.addVar(lb=0.0, ub=1.0, vtype=GRB.BINARY, name=name)

    def add_constraint(self, variables, sense, rhs, name=""):
        with engine_errors():
            return self.model.addLConstr(gp.quicksum(variables), _SENSES[sense], rhs, name)

    def set_objective(self, terms):
        coefficients, variables = [], []
        for coefficient, variable in terms:
            coefficients.append(coefficient)
            variables.append(variable)
        with engine_errors():
            self.model.setObjective(gp.LinExpr(coefficients, variables), GRB.MINIMIZE)

    def optimize(self, callback=None):
        wrapper = MIPSolCallback(callback) if callback is not None else None
        start = time.perf_counter()
        with engine_errors():
            if wrapper is None:
                self.model.optimize()
            else:
                self.model.optimize(wrapper)
        self.elapsed = time.perf_counter() - start

        if wrapper is not None and wrapper.error is not None:
            raise wrapper.error
        return solve_status(self.model.Status)

    def values(self, variables):
        with engine_errors():
            return self.model.getAttr(GRB.Attr.X, list(variables))

    def statistics(self):
        m = self.model
        with engine_errors():
            return SolveStatistics(
                variables=m.NumVars,
                linear_constraints=m.NumConstrs,
                quadratic_constraints=m.NumQConstrs,
                iterations=int(m.IterCount),
                elapsed=self.elapsed,
                solutions=m.SolCount,
                objective=m.ObjVal if m.SolCount > 0 else None,
            )

    def close(self):
        self.model.dispose()
        if self._owns_env:
            self.env.dispose()
