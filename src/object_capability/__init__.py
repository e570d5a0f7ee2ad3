"""
Object Capability: runtime composition of behaviour onto objects.

Grant or revoke named bundles of methods and state ("capabilities") on
individual objects while the program runs.

The engine provides:
- No-clobber composition (a capability never overwrites a slot)
- Declared dependencies (requires / brings)
- Lifecycle hooks (constructors, destructors, before/after add and remove)
- O(1) presence tracking (RTTI)
- Factories (capabilities that are also constructors)
- Self-logging (the engine journals its own composition events)

Example:
    >>> from object_capability import Capability, Instance
    >>>
    >>> greets = Capability('greets')
    >>> greets.add_member('greet', lambda self: f'Hello, {self.name}!')
    >>>
    >>> obj = greets.create(Instance(name='World'))
    >>> obj.greet()
    'Hello, World!'
    >>> greets.remove(obj)      # obj is back to its original slots

Computation combinators (sequence, optional, fallible) live in
object_capability.combinators and are built entirely on the engine.
"""

__version__ = "0.1.0"

from object_capability.core import (
    Capability,
    CapabilityError,
    CollisionError,
    ComputationFault,
    Factory,
    Instance,
    ListInstance,
    MissingDependencyError,
    is_present,
    logs_to_itself,
    make_factory,
    tracked_capability,
)

__all__ = [
    "__version__",
    "Capability",
    "CapabilityError",
    "CollisionError",
    "ComputationFault",
    "Factory",
    "Instance",
    "ListInstance",
    "MissingDependencyError",
    "is_present",
    "logs_to_itself",
    "make_factory",
    "tracked_capability",
]
