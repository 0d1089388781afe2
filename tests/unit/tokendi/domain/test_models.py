"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from tokendi.domain import ContainerSettings, Lifetime, Registration, Token


class TestToken:
    """Test cases for Token."""

    def test_tokens_with_same_name_are_distinct(self):
        """Test that equality is identity based, not name based."""
        first = Token("Storage")
        second = Token("Storage")
        assert first != second
        assert first == first

    def test_tokens_hash_by_identity(self):
        """Test that same-named tokens are different dictionary keys."""
        first = Token("Storage")
        second = Token("Storage")
        mapping = {first: 1, second: 2}
        assert len(mapping) == 2
        assert mapping[first] == 1

    def test_name_and_repr(self):
        """Test name property and repr."""
        token = Token("Logger")
        assert token.name == "Logger"
        assert repr(token) == "Token('Logger')"

    def test_token_has_no_instance_dict(self):
        """Test that tokens cannot grow arbitrary attributes."""
        token = Token("Logger")
        with pytest.raises(AttributeError):
            token.extra = 1


class TestRegistration:
    """Test cases for the Registration value object."""

    def test_constructor_style_registration(self):
        """Test a builder registration with dependencies and params."""
        token = Token("Processor")
        dep = Token("Logger")

        registration = Registration(
            token=token,
            lifetime=Lifetime.SCOPED,
            builder=dict,
            dependencies=[dep],
            params=["x"],
        )

        assert registration.token is token
        assert registration.lifetime == Lifetime.SCOPED
        assert registration.dependencies == (dep,)
        assert registration.params == ("x",)
        assert registration.is_factory is False

    def test_factory_registration(self):
        """Test a factory registration."""
        registration = Registration(token=Token("Storage"), factory=object)
        assert registration.is_factory is True
        assert registration.lifetime == Lifetime.PER_REQUEST
        assert registration.dependencies == ()
        assert registration.params == ()

    def test_params_keep_identity(self):
        """Test that literal params are stored as given, not copied."""
        payload = {"path": "prod.db"}
        registration = Registration(token=Token("Storage"), builder=dict, params=[payload])
        assert registration.params[0] is payload

    def test_requires_a_recipe(self):
        """Test that a registration without builder or factory is rejected."""
        with pytest.raises(ValidationError, match="Exactly one"):
            Registration(token=Token("Storage"))

    def test_rejects_builder_and_factory_together(self):
        """Test that builder and factory are mutually exclusive."""
        with pytest.raises(ValidationError, match="Exactly one"):
            Registration(token=Token("Storage"), builder=object, factory=object)

    def test_factory_cannot_declare_dependencies(self):
        """Test that factory registrations carry no dependency tokens."""
        with pytest.raises(ValidationError, match="cannot declare"):
            Registration(token=Token("Storage"), factory=object, dependencies=[Token("Logger")])

    def test_dependencies_must_be_tokens(self):
        """Test that dependency entries are validated as tokens."""
        with pytest.raises(ValidationError):
            Registration(token=Token("Processor"), builder=object, dependencies=["Logger"])

    def test_invalid_lifetime_rejected(self):
        """Test that unknown lifetime values are rejected."""
        with pytest.raises(ValidationError):
            Registration(token=Token("Storage"), factory=object, lifetime="forever")

    def test_registration_is_frozen(self):
        """Test that Registration is immutable."""
        registration = Registration(token=Token("Storage"), factory=object)
        with pytest.raises(ValidationError):
            registration.lifetime = Lifetime.SINGLETON


class TestContainerSettings:
    """Test cases for ContainerSettings."""

    def test_defaults(self):
        """Test default configuration."""
        settings = ContainerSettings()
        assert settings.detect_cycles is True
        assert settings.default_lifetime == Lifetime.PER_REQUEST

    def test_lifetime_from_string(self):
        """Test that the default lifetime can be given by value."""
        settings = ContainerSettings(default_lifetime="singleton")
        assert settings.default_lifetime == Lifetime.SINGLETON

    def test_settings_are_frozen(self):
        """Test that settings cannot be changed after creation."""
        settings = ContainerSettings()
        with pytest.raises(ValidationError):
            settings.detect_cycles = False
