from __future__ import annotations

import json
import logging
from typing import Optional

from ..academics.model import AcademicScope
from ..core.constants import ACADEMIC_DATA_KEY, AUTH_TOKEN_KEY, SESSION_KEYS, USER_DATA_KEY
from ..core.exceptions import NotAuthenticatedError, ScopeMissingError
from ..storage.base import KeyValueStorage
from .model import AuthenticatedUser

logger = logging.getLogger(__name__)


class SessionStore:
    """Explicit session context handed to services and workflows.

    Values are stored wholesale per key as JSON; there are no partial updates.
    """

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def _read_json(self, key: str):
        raw = self._storage.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable session value for %s", key)
            return None

    # -- identity -----------------------------------------------------------

    def save_login(self, token: str, user: AuthenticatedUser) -> None:
        self._storage.set(AUTH_TOKEN_KEY, token)
        self._storage.set(USER_DATA_KEY, json.dumps(user.to_dict()))

    @property
    def auth_token(self) -> Optional[str]:
        return self._storage.get(AUTH_TOKEN_KEY) or None

    def current_user(self) -> Optional[AuthenticatedUser]:
        data = self._read_json(USER_DATA_KEY)
        if not isinstance(data, dict):
            return None
        return AuthenticatedUser.from_dict(data)

    def require_user(self) -> AuthenticatedUser:
        user = self.current_user()
        if user is None:
            raise NotAuthenticatedError("User not found")
        return user

    # -- academic scope hand-off --------------------------------------------

    def save_academic_scope(self, scope: AcademicScope) -> None:
        self._storage.set(ACADEMIC_DATA_KEY, json.dumps(scope.to_dict()))

    def load_academic_scope(self) -> Optional[AcademicScope]:
        data = self._read_json(ACADEMIC_DATA_KEY)
        if not isinstance(data, dict):
            return None
        return AcademicScope.from_dict(data)

    def require_academic_scope(self) -> AcademicScope:
        scope = self.load_academic_scope()
        if scope is None:
            raise ScopeMissingError("Select a class before marking attendance")
        return scope

    def clear(self) -> None:
        for key in SESSION_KEYS:
            self._storage.delete(key)
