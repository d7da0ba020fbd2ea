"""
Operator identity attached to every stock mutation
"""
from dataclasses import dataclass
from typing import Optional

from marmoraria.exceptions import AuthenticationError


@dataclass(frozen=True)
class OperatorIdentity:
    id: str
    name: str


class IdentityContext:
    """
    Holds the operator behind the current request.

    ``current()`` is the only accessor services use; it fails loudly when
    nobody is authenticated so no mutation goes unattributed.
    """

    def __init__(self, identity: Optional[OperatorIdentity] = None):
        self._identity = identity

    @classmethod
    def for_user(cls, user) -> "IdentityContext":
        return cls(OperatorIdentity(id=user.id, name=user.name))

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def current(self) -> OperatorIdentity:
        if self._identity is None:
            raise AuthenticationError("No authenticated operator")
        return self._identity
