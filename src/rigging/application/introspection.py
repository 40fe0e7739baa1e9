"""Application layer - Type introspection.

Describes the properties and the constructors of a class. Results only depend on
the static shape of the class and are cached for the lifetime of the process.
"""

import inspect
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, get_type_hints

from rigging.domain import ConstructorDescriptor, Inject, ParameterDescriptor, PropertyDescriptor, has_marker

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _type_hints(func: Optional[Callable]) -> Dict[str, Any]:
    """Resolve the type hints of a function.

    When a forward reference cannot be evaluated (typically a class defined in a
    function body), the raw annotations are returned: unresolved hints stay
    strings, so the caller decides whether the element needed one.
    """
    if func is None:
        return {}
    try:
        return get_type_hints(func)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))


def _parameters(func: Any) -> Tuple[ParameterDescriptor, ...]:
    """Describe the parameters of an unbound constructor function, skipping self/cls."""
    if not inspect.isfunction(func):
        # Inherited C-level __init__ (object, Exception, ...): nothing to inject
        return ()

    hints = _type_hints(func)
    parameters = list(inspect.signature(func).parameters.values())[1:]
    return tuple(
        ParameterDescriptor(
            name=parameter.name,
            annotation=hints.get(parameter.name),
            kind=parameter.kind,
            has_default=parameter.default is not inspect.Parameter.empty,
        )
        for parameter in parameters
        if parameter.kind not in _VARIADIC
    )


def _property_type(prop: property) -> Optional[Any]:
    if prop.fset is not None:
        parameters = list(inspect.signature(prop.fset).parameters)
        if len(parameters) >= 2:
            annotation = _type_hints(prop.fset).get(parameters[1])
            if annotation is not None:
                return annotation
    return _type_hints(prop.fget).get("return")


def _public_attributes(cls: Type) -> Dict[str, Any]:
    """Collect public class attributes, the most derived definition winning."""
    attributes: Dict[str, Any] = {}
    for klass in cls.__mro__:
        for name, attribute in vars(klass).items():
            if name.startswith("_") or name in attributes:
                continue
            attributes[name] = attribute
    return attributes


@lru_cache(maxsize=None)
def _properties(cls: Type) -> Tuple[PropertyDescriptor, ...]:
    descriptors = [
        PropertyDescriptor(
            name=name,
            getter=attribute.fget,
            setter=attribute.fset,
            annotation=_property_type(attribute),
        )
        for name, attribute in _public_attributes(cls).items()
        if isinstance(attribute, property)
    ]
    return tuple(sorted(descriptors, key=lambda descriptor: descriptor.name))


@lru_cache(maxsize=None)
def _constructors(cls: Type) -> Tuple[ConstructorDescriptor, ...]:
    init = cls.__init__
    constructors = [
        ConstructorDescriptor(
            name="__init__",
            factory=cls,
            parameters=_parameters(init),
            injectable=has_marker(init, Inject),
        )
    ]
    for name, attribute in _public_attributes(cls).items():
        if isinstance(attribute, classmethod) and has_marker(attribute, Inject):
            constructors.append(
                ConstructorDescriptor(
                    name=name,
                    factory=getattr(cls, name),
                    parameters=_parameters(attribute.__func__),
                    injectable=True,
                )
            )
    return tuple(constructors)


def properties_of(cls: Type) -> List[PropertyDescriptor]:
    """Return the public properties of a class, sorted by name.

    Args:
        cls: The class to describe.

    Returns:
        One descriptor per property with its accessors and declared type.

    Example:
        >>> class Person:
        ...     @property
        ...     def age(self) -> int:
        ...         return self._age
        >>> [p.name for p in properties_of(Person)]
        ['age']
    """
    return list(_properties(cls))


def eligible_constructors_of(cls: Type) -> List[ConstructorDescriptor]:
    """Return the constructors of a class: __init__ plus marked classmethod factories.

    Args:
        cls: The class to describe.

    Returns:
        Constructor descriptors, __init__ first, flagged by the injection marker.
    """
    return list(_constructors(cls))


def injectable_properties_of(cls: Type) -> List[PropertyDescriptor]:
    """Return the properties whose setter carries the injection marker."""
    return [descriptor for descriptor in _properties(cls) if has_marker(descriptor.setter, Inject)]
