"""
The util module provides a collection of general purpose methods.
"""

from . import warnings
import stringly
import os
import collections
import inspect
import functools
import operator
import decimal


def gather(items):
    gathered = collections.defaultdict(list)
    # NOTE: defaultdict is subclass of dict, so it maintains the insertion order
    for key, value in items:
        gathered[key].append(value)
    return gathered.items()


def unique(items, key=None):
    '''Deduplicate items in sequence.

    Return a tuple `(unique, indices)` such that `items[i] == unique[indices[i]]`
    and `unique` does not contain duplicate items. An optional `key` is applied
    to all items before testing for equality.
    '''

    seen = {}
    unique = []
    indices = []
    for item in items:
        k = item if key is None else key(item)
        try:
            index = seen[k]
        except KeyError:
            index = seen[k] = len(unique)
            unique.append(item)
        indices.append(index)
    return unique, indices


class cached_property:
    '''Property that is computed once per instance and then retained.

    The value is stored in the instance ``__dict__`` under the property name,
    where it shadows the descriptor on subsequent lookups. No lock is taken:
    concurrent first reads may each compute the value, the last one stored
    wins.

    >>> class Test:
    ...   @cached_property
    ...   def value(self):
    ...     print('computing')
    ...     return 1
    ...
    >>> T = Test()
    >>> T.value
    computing
    1
    >>> T.value
    1
    '''

    def __init__(self, f):
        functools.update_wrapper(self, f)
        self.name = f.__name__

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        try:
            return instance.__dict__[self.name]
        except KeyError:
            value = instance.__dict__[self.name] = self.__wrapped__(instance)
            return value


def multiset(items):
    '''Hashable, order independent representation of a sequence.

    >>> multiset('abca') == multiset('caab')
    True
    >>> multiset('abc') == multiset('abcc')
    False
    '''

    return frozenset(collections.Counter(items).items())


def equal_ignoring_order(left, right, eq=operator.eq):
    '''Test if two sequences hold the same items with the same multiplicities.

    Every item of ``left`` consumes the first not yet matched item of ``right``
    that compares equal according to ``eq``.

    >>> equal_ignoring_order([1, 2, 2], [2, 1, 2])
    True
    >>> equal_ignoring_order([1, 1, 2], [1, 2, 2])
    False
    '''

    if len(left) != len(right):
        return False
    unmatched = list(range(len(right)))
    for item in left:
        for n, i in enumerate(unmatched):
            if eq(item, right[i]):
                del unmatched[n]
                break
        else:
            return False
    return not unmatched


def check_integer(value, name):
    '''Return ``value`` as an int, raising ValueError if it is not integral.

    Booleans and floats are rejected even if their value is integral.'''

    if isinstance(value, bool):
        raise ValueError(f'{name} must be an integer, got {value!r}')
    try:
        return operator.index(value)
    except TypeError:
        raise ValueError(f'{name} must be an integer, got {value!r}') from None


def localname(iri):
    '''Return the part of an IRI after the last slash or hash.

    >>> localname('http://qudt.org/vocab/unit/KiloGM')
    'KiloGM'
    '''

    return iri[max(iri.rfind('/'), iri.rfind('#'))+1:]


def defaults_from_env(f):
    '''Decorator for changing function defaults based on environment.

    This decorator searches the environment for variables matching the pattern
    ``DIMUTILS_MYPARAM``, where ``myparam`` is a parameter of the decorated
    function. Only parameters with type annotation and a default value are
    considered, and the string value is deserialized using `Stringly
    <https://pypi.org/project/stringly/>`_. In case deserialization fails, a
    warning is emitted and the original default is maintained.'''

    sig = inspect.signature(f)
    params = []
    changed = False
    for param in sig.parameters.values():
        envname = f'DIMUTILS_{param.name.upper()}'
        if envname in os.environ and param.annotation != param.empty and param.default != param.empty:
            try:
                v = stringly.loads(param.annotation, os.environ[envname])
            except Exception as e:
                warnings.warn(f'ignoring environment variable {envname}: {e}')
            else:
                param = param.replace(default=v)
                changed = True
        params.append(param)
    if not changed:
        return f
    sig = sig.replace(parameters=params)
    @functools.wraps(f)
    def defaults_from_env(*args, **kwargs):
        bound = sig.bind(*args, **kwargs)
        bound.apply_defaults()
        return f(*bound.args, **bound.kwargs)
    defaults_from_env.__signature__ = sig
    return defaults_from_env


@defaults_from_env
def decimal_context(precision: int = 34):
    '''Context manager for decimal arithmetic with ``precision`` significant digits.

    The default follows the ``DIMUTILS_PRECISION`` environment variable.'''

    context = decimal.getcontext().copy()
    context.prec = precision
    return decimal.localcontext(context)


# vim:sw=4:sts=4:et
