# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: conduit
"""
Error classes for the conduit dependency injection container.

Each error carries a registered ``ErrorCode`` and structured context so
failures can be logged or serialized with ``to_dict()``.
"""

from __future__ import annotations

from typing import Any, Final

from conduit.errors.base import ConduitError, ErrorCategory, ErrorCode, ErrorSeverity

INJECTION: Final = ErrorCategory.get_or_create("INJECTION")
INJECTION_ERROR: Final = ErrorCode.get_or_create("INJECTION_ERROR", INJECTION)
INJECTION_SERVICE_NOT_FOUND: Final = ErrorCode.get_or_create(
    "INJECTION_SERVICE_NOT_FOUND", INJECTION
)
INJECTION_CIRCULAR_DEPENDENCY: Final = ErrorCode.get_or_create(
    "INJECTION_CIRCULAR_DEPENDENCY", INJECTION
)
INJECTION_PROPERTY: Final = ErrorCode.get_or_create("INJECTION_PROPERTY", INJECTION)


def token_name(token: Any) -> str:
    """Human readable name of a service token."""
    if isinstance(token, str):
        return token
    return getattr(token, "__name__", repr(token))


class InjectionError(ConduitError):
    """Base class for all DI-related errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = INJECTION_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        # Accept both ErrorCode and str for code
        if isinstance(code, str):
            code = ErrorCode.get_by_code(code)
        super().__init__(
            message,
            code=code,
            severity=severity,
            context=context,
            **kwargs,
        )


class ServiceNotFoundError(InjectionError, LookupError):
    """Raised when a requested token has no definition in the container.

    When raised for a constructor parameter, the context also names the
    parameter and the class being built.
    """

    def __init__(
        self,
        token: Any,
        parameter: str | None = None,
        dependent: Any = None,
        **kwargs: Any,
    ) -> None:
        name = token_name(token)
        if parameter is not None and dependent is not None:
            message = (
                f"Service '{name}' is not registered in the DI container "
                f"(required by parameter '{parameter}' of {token_name(dependent)})"
            )
            kwargs.update(parameter=parameter, dependent=token_name(dependent))
        else:
            message = f"Service '{name}' is not registered in the DI container"
        self.token = token
        super().__init__(
            message,
            code=INJECTION_SERVICE_NOT_FOUND,
            service_key=name,
            **kwargs,
        )


class CircularDependencyError(InjectionError):
    """Raised when a token is requested while it is already being resolved.

    ``dependency_chain`` holds the tokens on the resolution stack followed by
    the token that closed the cycle.
    """

    def __init__(self, token: Any, stack: list[Any], **kwargs: Any) -> None:
        chain = [token_name(t) for t in stack] + [token_name(token)]
        self.dependency_chain = chain
        super().__init__(
            f"Circular dependency detected while resolving {token_name(token)}. "
            f"Stack: {' -> '.join(chain)}",
            code=INJECTION_CIRCULAR_DEPENDENCY,
            dependency_chain=chain,
            **kwargs,
        )


class PropertyInjectionError(InjectionError):
    """A declared property could not be injected. Logged, never raised by the container."""

    def __init__(
        self,
        owner: type,
        attribute: str,
        target: Any,
        error: BaseException,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Failed to inject property '{attribute}' of {owner.__name__} "
            f"with {token_name(target)}: {error}",
            code=INJECTION_PROPERTY,
            severity=ErrorSeverity.WARNING,
            attribute=attribute,
            owner=owner.__name__,
            target=token_name(target),
            error=repr(error),
            **kwargs,
        )
