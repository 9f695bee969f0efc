"""Exceptions shared by the cleaners and the permission engine.

Caller errors (a missing subject, a predicate attached to the wrong kind
of subject) are raised. Data-shape problems on the subject itself, such as
a malformed capability flag, are never raised: the permission engine turns
them into a denial.
"""
from __future__ import annotations


def _type_name(expected: type | tuple[type, ...]) -> str:
    if isinstance(expected, tuple):
        return " | ".join(t.__name__ for t in expected)
    return expected.__name__


class InvalidRequestError(ValueError):
    """Raised when an authorization request is missing a required part."""


class InvalidSubjectError(InvalidRequestError):
    """Raised when the requested subject is ``None``."""

    def __init__(self, message: str = "Requested subject must not be None.") -> None:
        super().__init__(message)


class InvalidActionError(InvalidRequestError):
    """Raised when the requested action is ``None``."""

    def __init__(self, message: str = "Requested action must not be None.") -> None:
        super().__init__(message)


class PredicateTypeError(TypeError):
    """Raised when a typed predicate is invoked with an incompatible subject.

    Attributes
    ----------
    expected_type:
        The subject type the predicate was declared for.
    actual_type:
        The runtime type of the subject it received.
    """

    def __init__(self, expected_type: type | tuple[type, ...], actual_type: type) -> None:
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"Predicate expects a subject of type {_type_name(expected_type)!r}; "
            f"got {actual_type.__name__!r}."
        )


class UnknownRoleError(KeyError):
    """Raised when a policy is asked for a role it does not define.

    Attributes
    ----------
    role:
        The role name that was requested.
    """

    def __init__(self, role: str) -> None:
        self.role = role
        super().__init__(role)

    def __str__(self) -> str:
        return f"Unknown role {self.role!r}."
