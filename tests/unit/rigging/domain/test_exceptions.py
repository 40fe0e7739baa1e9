"""Unit tests for domain exceptions."""

import pytest

from rigging.domain.exceptions import (
    AmbiguousConstructorError,
    DispatchError,
    DuplicateBindingError,
    NoEligibleConstructorError,
    RiggingError,
    UnresolvedDependencyError,
)


class Greeter:
    pass


class TestRiggingError:
    """Test cases for the base RiggingError class."""

    def test_rigging_error_is_exception(self):
        """Test that RiggingError inherits from Exception."""
        assert issubclass(RiggingError, Exception)

    def test_rigging_error_can_be_raised(self):
        """Test that RiggingError can be raised with a message."""
        with pytest.raises(RiggingError, match="Test error"):
            raise RiggingError("Test error")

    @pytest.mark.parametrize(
        "error_type",
        [
            DuplicateBindingError,
            AmbiguousConstructorError,
            NoEligibleConstructorError,
            UnresolvedDependencyError,
            DispatchError,
        ],
    )
    def test_all_errors_inherit_from_rigging_error(self, error_type):
        """Test that every error kind can be caught as RiggingError."""
        assert issubclass(error_type, RiggingError)


class TestDuplicateBindingError:
    """Test cases for the DuplicateBindingError class."""

    def test_keeps_contract(self):
        """Test that the contract is stored on the error."""
        error = DuplicateBindingError(Greeter)
        assert error.contract is Greeter

    def test_message_names_contract(self):
        """Test that the message names the contract."""
        assert str(DuplicateBindingError(Greeter)) == "Contract Greeter is already bound in this registry"

    def test_non_type_contract_uses_repr(self):
        """Test that a contract without __name__ is shown with repr."""
        assert "'key'" in str(DuplicateBindingError("key"))


class TestAmbiguousConstructorError:
    """Test cases for the AmbiguousConstructorError class."""

    def test_keeps_implementation_and_constructors(self):
        """Test that attributes are stored on the error."""
        error = AmbiguousConstructorError(Greeter, ["__init__", "create"])
        assert error.implementation is Greeter
        assert error.constructors == ["__init__", "create"]

    def test_message_lists_constructors(self):
        """Test that the message lists the marked constructors."""
        error = AmbiguousConstructorError(Greeter, ["__init__", "create"])
        assert "Greeter" in str(error)
        assert "__init__, create" in str(error)


class TestNoEligibleConstructorError:
    """Test cases for the NoEligibleConstructorError class."""

    def test_keeps_implementation(self):
        """Test that the implementation is stored on the error."""
        error = NoEligibleConstructorError(Greeter)
        assert error.implementation is Greeter
        assert "Greeter" in str(error)


class TestUnresolvedDependencyError:
    """Test cases for the UnresolvedDependencyError class."""

    def test_without_reason(self):
        """Test message without a reason."""
        error = UnresolvedDependencyError(Greeter)
        assert error.contract is Greeter
        assert error.reason is None
        assert str(error) == "Cannot resolve dependency for type: Greeter"

    def test_with_reason(self):
        """Test message with a reason."""
        error = UnresolvedDependencyError(Greeter, "No provider is registered for this type.")
        assert error.reason == "No provider is registered for this type."
        assert str(error) == (
            "Cannot resolve dependency for type: Greeter. Reason: No provider is registered for this type."
        )


class TestDispatchError:
    """Test cases for the DispatchError class."""

    def test_is_attribute_error(self):
        """Test that DispatchError can be caught as AttributeError."""
        assert issubclass(DispatchError, AttributeError)

    def test_keeps_contract_and_name(self):
        """Test that attributes are stored on the error."""
        error = DispatchError(Greeter, "shout")
        assert error.contract is Greeter
        assert error.name == "shout"
        assert str(error) == "'shout' is not an operation of contract Greeter"
