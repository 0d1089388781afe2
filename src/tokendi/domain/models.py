from typing import Any, Callable, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tokendi.domain.enums import Lifetime

T = TypeVar("T")


class Token(Generic[T]):
    """Opaque identifier for a capability.

    Tokens compare and hash by identity: two tokens created with the same
    name are still two different capabilities. The name only shows up in
    ``repr`` and error messages.

    Example:
        >>> StorageToken: Token[Storage] = Token("Storage")
    """

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Token({self._name!r})"


class Registration(BaseModel):
    """Value object describing how to satisfy a token.

    Holds either a constructor-style recipe (``builder`` called with resolved
    ``dependencies`` followed by ``params``) or a zero-argument ``factory``.

    Attributes:
        token: The token being registered.
        lifetime: How long a built instance lives.
        builder: Callable invoked with resolved dependencies and literal params.
        dependencies: Tokens resolved, in order, before calling the builder.
        params: Literal arguments appended after the resolved dependencies.
        factory: Zero-argument callable producing the instance directly.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    token: Token = Field(..., description="The token this registration satisfies.")
    lifetime: Lifetime = Field(default=Lifetime.PER_REQUEST, description="The lifetime of built instances.")
    builder: Optional[Callable[..., Any]] = Field(
        default=None, description="Constructor-style builder receiving dependencies then params."
    )
    dependencies: Tuple[Token, ...] = Field(
        default=(), description="Ordered dependency tokens resolved before building."
    )
    params: Tuple[Any, ...] = Field(default=(), description="Ordered literal parameters appended after dependencies.")
    factory: Optional[Callable[[], Any]] = Field(
        default=None, description="Zero-argument factory producing the instance directly."
    )

    @model_validator(mode="after")
    def _check_recipe(self) -> "Registration":
        if (self.builder is None) == (self.factory is None):
            raise ValueError("Exactly one of 'builder' or 'factory' must be provided.")
        if self.factory is not None and (self.dependencies or self.params):
            raise ValueError("Factory registrations cannot declare dependencies or params.")
        return self

    @property
    def is_factory(self) -> bool:
        return self.factory is not None


class ContainerSettings(BaseModel):
    """Configuration for a container instance.

    Attributes:
        detect_cycles: Fail with CircularDependencyError when a token re-enters
            its own build. When disabled, cyclic graphs recurse until Python's
            recursion limit raises RecursionError.
        default_lifetime: Lifetime used when a registration does not name one.
    """

    model_config = ConfigDict(frozen=True)

    detect_cycles: bool = Field(default=True, description="Guard against cyclic dependency graphs.")
    default_lifetime: Lifetime = Field(
        default=Lifetime.PER_REQUEST, description="Lifetime applied when none is given at registration."
    )
