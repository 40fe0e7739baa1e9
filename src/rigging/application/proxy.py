"""Application layer - Dispatch proxies.

A proxy class is generated once per contract. It subclasses the contract and
overrides each operation with a forwarder into the interception entry point of
the registry held by the proxy instance.
"""

import functools
import inspect
from typing import Any, Callable, Dict, Type, TypeVar

from rigging.domain import Arguments, DispatchError, IInterceptorRegistry, Operation, markers_of

T = TypeVar("T")

_TARGET_ATTRIBUTE = "_rigging_target"
_REGISTRY_ATTRIBUTE = "_rigging_registry"


def operations_of(contract: Type) -> Dict[str, Callable[..., Any]]:
    """Return the operations declared by a contract: public methods plus abstract ones.

    Args:
        contract: The contract class.

    Returns:
        Mapping of operation names to the functions declared on the contract.
    """
    abstract = set(getattr(contract, "__abstractmethods__", ()))
    operations: Dict[str, Callable[..., Any]] = {}
    seen = set()
    for klass in contract.__mro__:
        if klass is object:
            continue
        for name, attribute in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if inspect.isfunction(attribute) and (not name.startswith("_") or name in abstract):
                operations[name] = attribute
    return operations


def _forwarder(operation: Operation) -> Callable[..., Any]:
    @functools.wraps(operation.function, updated=())
    def forward(self: Any, *args: Any, **kwargs: Any) -> Any:
        registry: IInterceptorRegistry = object.__getattribute__(self, _REGISTRY_ATTRIBUTE)
        target = object.__getattribute__(self, _TARGET_ATTRIBUTE)
        return registry.invoke(target, operation, Arguments(args=args, kwargs=kwargs))

    return forward


def _delegate(name: str) -> property:
    def fget(self: Any) -> Any:
        return getattr(object.__getattribute__(self, _TARGET_ATTRIBUTE), name)

    def fset(self: Any, value: Any) -> None:
        setattr(object.__getattribute__(self, _TARGET_ATTRIBUTE), name, value)

    return property(fget, fset, doc=f"Attribute '{name}' of the target.")


@functools.lru_cache(maxsize=None)
def proxy_class_for(contract: Type[T]) -> Type[T]:
    """Generate (once) the proxy class of a contract.

    Args:
        contract: The contract class to implement.

    Returns:
        A concrete subclass of the contract whose operations all forward to the
        registry. Abstract members that are not operations delegate to the target.
    """
    contract_name = getattr(contract, "__name__", "Contract")

    def __getattr__(self: Any, name: str) -> Any:
        raise DispatchError(contract, name)

    def __repr__(self: Any) -> str:
        return f"<{contract_name} proxy for {object.__getattribute__(self, _TARGET_ATTRIBUTE)!r}>"

    namespace: Dict[str, Any] = {
        "__module__": __name__,
        "__getattr__": __getattr__,
        "__repr__": __repr__,
    }
    for name, function in operations_of(contract).items():
        operation = Operation(contract=contract, name=name, function=function, markers=markers_of(function))
        namespace[name] = _forwarder(operation)

    # Abstract properties, classmethods and staticmethods read through to the target
    for name in getattr(contract, "__abstractmethods__", ()):
        if name not in namespace:
            namespace[name] = _delegate(name)

    return type(f"{contract_name}Proxy", (contract,), namespace)


def new_proxy(contract: Type[T], target: T, registry: IInterceptorRegistry) -> T:
    """Instantiate the proxy class of a contract around a target.

    The contract's own __init__ is not called; the proxy only holds references to
    the target and the registry.
    """
    proxy_class = proxy_class_for(contract)
    proxy = object.__new__(proxy_class)
    object.__setattr__(proxy, _TARGET_ATTRIBUTE, target)
    object.__setattr__(proxy, _REGISTRY_ATTRIBUTE, registry)
    return proxy
