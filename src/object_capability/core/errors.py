"""
Capability errors

Composition failures are signalled with exceptions and never caught by the
engine itself. Whatever ran before the failure (hooks, prerequisites pulled
in by brings) stays in effect: there is no rollback.

ComputationFault is the exception continuations raise to signal a failed
computation. Only the fallible combinator catches it.
"""


class CapabilityError(Exception):
    """Base exception for capability composition errors"""
    pass


class CollisionError(CapabilityError):
    """Raised when a capability member would shadow an existing slot"""

    def __init__(self, obj, capability, conflicting_name: str):
        self.obj = obj
        self.capability = capability
        self.conflicting_name = conflicting_name
        super().__init__(
            f"Colliding attribute '{conflicting_name}' while adding "
            f"{capability!r} to {type(obj).__name__}"
        )


class MissingDependencyError(CapabilityError):
    """Raised when a required capability is not implemented on the object"""

    def __init__(self, obj, capability, dependent=None):
        self.obj = obj
        self.capability = capability
        self.dependent = dependent
        required_by = f" (required by {dependent!r})" if dependent is not None else ''
        super().__init__(
            f"{type(obj).__name__} does not implement {capability!r}{required_by}"
        )


class ComputationFault(CapabilityError):
    """Raised inside a bind continuation to fail the computation"""
    pass
