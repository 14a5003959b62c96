'''
The assignment module solves the rectangular assignment problem: given a
weight matrix with no more rows than columns, assign a distinct column to
every row such that the sum of assigned weights is minimal.

    >>> solve([[4, 1, 3], [2, 0, 5]]).columns
    (1, 0)

The solver is a depth first branch and bound search. Columns are tried in
ascending order of weight, and a partial assignment is abandoned as soon as
its weight plus the sum of the smallest still available weight of every
remaining row cannot improve on the best complete assignment found so far.
Among assignments of equal weight the first one found is retained.
'''

import dataclasses
import numpy
import typing


@dataclasses.dataclass(frozen=True)
class Assignment:
    '''Solution of an assignment problem.

    ``columns[i]`` is the column assigned to row ``i``.'''

    columns: typing.Tuple[int, ...]
    weight: float

    def __len__(self):
        return len(self.columns)


def solve(weights) -> Assignment:
    '''Find the assignment of minimal total weight.

    Args
    ----
    weights : 2D array-like of floats
        Weight matrix with at least one row and no more rows than columns.

    Returns
    -------
    :class:`Assignment`
    '''

    weights = numpy.asarray(weights, dtype=float)
    if weights.ndim != 2 or not weights.size:
        raise ValueError(f'not a valid weights matrix of shape {weights.shape}')
    nrows, ncols = weights.shape
    if nrows > ncols:
        raise ValueError('the weights matrix may not have more rows than columns')

    best = None

    def descend(row, columns, weight):
        nonlocal best
        if row == nrows:
            if best is None or weight < best.weight:
                best = Assignment(columns, weight)
            return
        available = numpy.ones(ncols, dtype=bool)
        available[list(columns)] = False
        if best is not None and weight + weights[row:, available].min(axis=1).sum() >= best.weight:
            return
        candidates = numpy.flatnonzero(available)
        for column in candidates[numpy.argsort(weights[row, candidates], kind='stable')]:
            if best is None or weight + weights[row, column] < best.weight:
                descend(row+1, columns + (int(column),), weight + float(weights[row, column]))

    descend(0, (), 0.)
    return best


# vim:sw=4:sts=4:et
