"""
Computation combinators

Bind/return families built with the capability engine. There is no abstract
Monad type: each family is a factory whose instances carry two members,
mbind and mreturn.

    mbind(f)     calls f(mreturn, value) for the instance's value(s)
    mreturn(x)   wraps a bare value as a minimal instance of the family

The continuation receives the family's mreturn as its first argument, so one
continuation can be generic across families:

    def tenfold(unit, x):
        return unit(x * 10)

    sequence(items=[1, 2]).mbind(tenfold)      # -> [10, 20]
    optional(value=4).mbind(tenfold)           # -> optional 40
    optional.nothing.mbind(tenfold)            # -> optional.nothing

Families:
    sequence  ordered list semantics, results concatenated (one level)
    optional  present value or ABSENT, short-circuits on ABSENT
    fallible  success value or failure error, captures ComputationFault
"""

from object_capability.core.capability import ListInstance
from object_capability.core.errors import ComputationFault
from object_capability.core.factory import Factory, make_factory
from object_capability.core.rtti import rtti_enabled
from object_capability.core.self_logger import get_journal


class _Absent:
    """Marker for an optional/fallible instance without a value"""

    def __repr__(self):
        return 'ABSENT'

    def __bool__(self):
        return False


ABSENT = _Absent()


# Family construction

def _install_bind_and_return(family, capability):
    params = family.construction_parameters
    family.name = params.get('name') or family.name
    family.base = params.get('base')
    family.add_member('mbind', params['mbind'])
    family.add_member('mreturn', params['mreturn'])

    # Instances know their family in O(1): family.rtti.is_present(...)
    rtti_enabled.add(family)


monadic = make_factory(Factory, name='monadic').add_constructor(_install_bind_and_return)


def _store_value(obj, family):
    params = getattr(obj, 'construction_parameters', {})
    obj.value = params.get('value', ABSENT)


def _extract(self):
    return None if self.value is ABSENT else self.value


def _make_singular(family, capability):
    family.add_constructor(_store_value)
    family.add_member('extract', _extract)


singular = make_factory(monadic, name='singular').add_constructor(_make_singular)


# Sequence

def _sequence_bind(self, f):
    result = []
    for item in self:
        produced = f(self.mreturn, item)
        if isinstance(produced, list):
            result.extend(produced)
        else:
            result.append(produced)
    return sequence(items=result)


def _sequence_return(self, x):
    """Wrap x as a one-element sequence; a list argument nests rather than splices"""
    return sequence(items=[x])


def _load_items(obj, family):
    params = getattr(obj, 'construction_parameters', {})
    obj.extend(params.get('items', ()))


sequence = monadic(
    name='sequence',
    base=ListInstance,
    mbind=_sequence_bind,
    mreturn=_sequence_return,
).add_constructor(_load_items)


# Optional

def _optional_bind(self, f):
    if self.value is ABSENT:
        return self
    return f(self.mreturn, self.value)


def _optional_return(self, x):
    return optional(value=x)


def _is_nothing(self):
    return self.value is ABSENT


optional = singular(name='optional', mbind=_optional_bind, mreturn=_optional_return)
optional.add_member('is_nothing', _is_nothing)
optional.nothing = optional()


# Fallible

def _fallible_bind(self, f):
    if self.is_failure():
        return self
    try:
        return f(self.mreturn, self.value)
    except fallible.catches as fault:
        journal = get_journal()
        if journal is not None:
            journal.info('Computation fault captured',
                         capability=fallible.name,
                         error=f'{type(fault).__name__}: {fault}')
        return fallible(error=fault)


def _fallible_return(self, x):
    return fallible(value=x)


def _store_error(obj, family):
    params = getattr(obj, 'construction_parameters', {})
    obj.error = params.get('error')


def _get_error(self):
    return self.error


def _is_failure(self):
    return self.error is not None


fallible = singular(name='fallible', mbind=_fallible_bind, mreturn=_fallible_return)
fallible.add_constructor(_store_error)
fallible.add_member('get_error', _get_error)
fallible.add_member('is_failure', _is_failure)

# Exception types converted into failed instances; anything else propagates
fallible.catches = (ComputationFault,)
