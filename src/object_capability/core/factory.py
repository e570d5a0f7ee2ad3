"""
Factory generator

make_factory() returns a capability that is also a constructor:

    point = make_factory().add_constructor(
        lambda obj, cap: setattr(obj, 'x', obj.construction_parameters.get('x', 0))
    )
    p = point(x=3)      # fresh Instance, construction_parameters={'x': 3}, x == 3

Calling a factory:
1. gets a starting instance from base (another factory gets the same
   parameters, any other callable is called bare, None gives an Instance)
2. stores the parameters on it as construction_parameters
3. composes the factory (its members and hooks) onto it
4. returns it

Constructors read named inputs from obj.construction_parameters.
"""

from typing import Any, Callable, Optional, Union

from object_capability.core.capability import Capability, Instance


class Factory(Capability):
    """A capability that can be called to build pre-composed instances"""

    def __init__(
        self,
        base: Optional[Union['Factory', Callable[[], Any]]] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name=name)
        self.base = base

    def __call__(self, **params) -> Any:
        obj = self.allocate(params)
        obj.construction_parameters = params
        return self.create(obj)

    def allocate(self, params: dict) -> Any:
        """Starting instance for a new object"""
        if self.base is None:
            return Instance()
        if isinstance(self.base, Factory):
            return self.base(**params)
        return self.base()


def make_factory(
    base: Optional[Union[Factory, Callable[[], Any]]] = None,
    name: Optional[str] = None,
) -> Factory:
    """Create a factory, optionally chained on a base factory or callable"""
    return Factory(base=base, name=name)
