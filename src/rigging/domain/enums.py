from enum import Enum


class BindingKind(str, Enum):
    """Describes how a contract was bound to its provider.

    Attributes:
        INSTANCE: Constant provider returning a pre-built instance.
        PROVIDER: Arbitrary zero-argument factory supplied by the caller.
        PROVIDER_CLASS: Provider derived from an implementation class with auto-wiring.
    """

    INSTANCE = "instance"
    PROVIDER = "provider"
    PROVIDER_CLASS = "provider_class"

    def __str__(self) -> str:
        return self.value
