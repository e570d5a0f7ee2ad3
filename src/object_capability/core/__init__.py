"""
Core primitives of the capability engine.

This package contains:
- capability: the Capability record and the add/remove pipeline
- errors: CollisionError, MissingDependencyError, ComputationFault
- factory: make_factory(), capabilities that are also constructors
- rtti: O(1) per-object presence tracking
- self_logger: append-only, queryable logs (the composition journal)
- self_logging: the logs_to_itself capability
- config: multi-source engine configuration

Philosophy:
    A capability extends an object, it never changes it.
    No overloading, no clobbering, no silent rollback.
"""

from object_capability.core.capability import (
    Capability,
    Instance,
    ListInstance,
    add,
    attach,
    brings,
    collides_with,
    create,
    detach,
    detect_collisions,
    implemented_on,
    remove,
    requires,
)
from object_capability.core.errors import (
    CapabilityError,
    CollisionError,
    ComputationFault,
    MissingDependencyError,
)
from object_capability.core.factory import Factory, make_factory
from object_capability.core.rtti import is_present, rtti_enabled, tracked, tracked_capability, tracker
from object_capability.core.self_logging import logs_to_itself

__all__ = [
    "Capability",
    "Instance",
    "ListInstance",
    "add",
    "attach",
    "brings",
    "collides_with",
    "create",
    "detach",
    "detect_collisions",
    "implemented_on",
    "remove",
    "requires",
    "CapabilityError",
    "CollisionError",
    "ComputationFault",
    "MissingDependencyError",
    "Factory",
    "make_factory",
    "is_present",
    "rtti_enabled",
    "tracked",
    "tracked_capability",
    "tracker",
    "logs_to_itself",
]
