from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

F = TypeVar("F")
M = TypeVar("M", bound="Marker")

MARKERS_ATTRIBUTE = "__rigging_markers__"


def _unwrap(target: Any) -> Any:
    if isinstance(target, (classmethod, staticmethod)):
        return target.__func__
    return target


class Marker(BaseModel):
    """Metadata tag attached to a function by using an instance as a decorator.

    Subclass it to declare a marker type; interceptors are registered against the
    subclass. Markers are stored on the undecorated function in source order, so
    the topmost decorator comes first.

    Attributes:
        name: Optional associated name, read by serialization or persistence layers.

    Example:
        >>> class Timed(Marker):
        ...     pass
        >>>
        >>> class Calculator(ABC):
        ...     @Timed()
        ...     @abstractmethod
        ...     def add(self, a: int, b: int) -> int: ...
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="Optional name associated with the marked element.")

    def __call__(self, target: F) -> F:
        function = _unwrap(target)
        if not callable(function):
            raise TypeError(f"{type(self).__name__} can only mark functions, got {target!r}")
        setattr(function, MARKERS_ATTRIBUTE, (self,) + markers_of(function))
        return target


class Inject(Marker):
    """Marks a constructor, a classmethod factory or a property setter for injection."""


inject = Inject()


def markers_of(target: Any) -> Tuple[Marker, ...]:
    """Return the markers attached to a function, in declared order."""
    return getattr(_unwrap(target), MARKERS_ATTRIBUTE, ())


def find_marker(target: Any, marker_type: Type[M]) -> Optional[M]:
    """Return the first marker of the given type attached to a function, if any."""
    for marker in markers_of(target):
        if isinstance(marker, marker_type):
            return marker
    return None


def has_marker(target: Optional[Callable], marker_type: Type[Marker]) -> bool:
    """Check whether a function carries a marker of the given type."""
    if target is None:
        return False
    return find_marker(target, marker_type) is not None
