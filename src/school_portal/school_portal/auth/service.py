from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.constants import ENDPOINT_STUDENT_LOGIN, ENDPOINT_TEACHER_LOGIN
from ..core.enums import UserType
from ..core.exceptions import ApplicationError, AuthenticationError
from ..gateway.client import RemoteGateway
from ..session.model import AuthenticatedUser
from ..session.store import SessionStore

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: log a student or teacher in and out of the portal."""

    def __init__(self, gateway: RemoteGateway, session: SessionStore):
        self._gateway = gateway
        self._session = session

    def login(self, login_id: str, password: str, *, user_type: UserType, remember_me: bool = False) -> AuthenticatedUser:
        login_id = require_non_empty(login_id, "Login ID")
        require_non_empty(password, "Password")

        endpoint = ENDPOINT_STUDENT_LOGIN if user_type == UserType.STUDENT else ENDPOINT_TEACHER_LOGIN
        try:
            data = self._gateway.post(
                endpoint,
                {"loginId": login_id, "pass": password, "rememberMe": bool(remember_me)},
            )
        except ApplicationError as e:
            raise AuthenticationError(e.message or "Invalid credentials") from e

        token = data.get("token")
        user_data = data.get("user")
        if not token or not isinstance(user_data, dict):
            raise AuthenticationError("Invalid credentials")

        user = AuthenticatedUser.from_dict({**user_data, "userType": user_type.value})
        self._session.save_login(str(token), user)
        logger.info("%s %s logged in", user_type.value, user.user_id)
        return user

    def logout(self) -> None:
        self._session.clear()
        logger.info("Session cleared")
