# Copyright 2024, Gurobi Optimization, LLC

# Points with two independent coordinate pairs, the two edge-cost metrics
# defined over them, and the helpers that read and sample them.

import enum
import logging
import math
import random
from dataclasses import dataclass, field

from .errors import InsufficientPopulation, InvalidInputFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vertex:
    """A sampled point. Two vertices are equal when their ids are, whatever
    their coordinates."""

    id: int
    a: tuple = field(compare=False)
    b: tuple = field(compare=False)

    def cost1(self, other):
        return math.ceil(math.hypot(self.a[0] - other.a[0], self.a[1] - other.a[1]))

    def cost2(self, other):
        return math.ceil(math.hypot(self.b[0] - other.b[0], self.b[1] - other.b[1]))

    def __str__(self):
        return f"v:{self.id}"


class Metric(enum.Enum):
    FIRST = 1
    SECOND = 2

    def cost(self, u, v):
        if self is Metric.FIRST:
            return u.cost1(v)
        return u.cost2(v)


class VertexSet(tuple):
    """Ordered, immutable collection of vertices. Ids are handed out here,
    once, so that a vertex's id is also its index in the set."""

    def __new__(cls, vertices=()):
        vertices = tuple(vertices)
        for index, vertex in enumerate(vertices):
            if vertex.id != index:
                raise ValueError(f"vertex {vertex} is stored at index {index}")
        return super().__new__(cls, vertices)

    @classmethod
    def from_records(cls, records):
        return cls(
            Vertex(i, (x1, y1), (x2, y2)) for i, (x1, y1, x2, y2) in enumerate(records)
        )

    @property
    def order(self):
        return len(self)


def parse_record(line):
    """Parse 'x1 y1 x2 y2' into a tuple of floats, or return None."""
    fields = line.split()
    if len(fields) != 4:
        return None
    try:
        record = tuple(float(f) for f in fields)
    except ValueError:
        return None
    if not all(math.isfinite(c) for c in record):
        return None
    return record


def read_records(filename):
    """Read the coordinate records of a file, one 'x1 y1 x2 y2' per line."""
    try:
        with open(filename, "rb") as f:
            lines = f.readlines()
    except OSError:
        raise InvalidInputFile.empty_or_missing(filename) from None

    records = []
    for lineno, raw in enumerate(lines, start=1):
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise InvalidInputFile.invalid_data(filename, lineno) from None
        if not line.strip():
            continue
        record = parse_record(line)
        if record is None:
            raise InvalidInputFile.invalid_data(filename, lineno)
        records.append(record)

    if not records:
        raise InvalidInputFile.empty_or_missing(filename)
    logger.debug("Read %d records from %s", len(records), filename)
    return records


def sample(population, count, seed):
    """Pick `count` items of `population`, always the same ones for the
    same seed, keeping their original relative order."""
    population = list(population)
    if count > len(population):
        raise InsufficientPopulation(len(population), count)
    rng = random.Random(seed)
    chosen = sorted(rng.sample(range(len(population)), count))
    return [population[i] for i in chosen]
