"""Guide application service."""

from __future__ import annotations

import logging

from ..exceptions import ApiError, NotFoundError, ValidationError
from ..models import GuideApplication
from .base import BaseService
from .const import (
    APPLICATION_DECISION_ENDPOINT,
    APPLICATION_LIST_ENDPOINT,
    APPLICATION_MINE_ENDPOINT,
)
from .mapping import map_application, map_items

_LOGGER = logging.getLogger(__name__)

_DECISIONS = ("approved", "rejected")


class ApplicationsService(BaseService):
    """Guide applications: the applicant's own view and admin review."""

    name = "applications"

    async def get_my_application(self) -> GuideApplication | None:
        """Return the current user's application, or None if they never applied."""
        try:
            data = await self._request_json("GET", APPLICATION_MINE_ENDPOINT, auth_required=True)
        except NotFoundError:
            return None
        if isinstance(data, dict) and isinstance(data.get("application"), dict):
            data = data["application"]
        if not isinstance(data, dict):
            raise ApiError("Response included invalid application data.")
        return map_application(data)

    async def list_applications(self) -> list[GuideApplication]:
        data = await self._request_json("GET", APPLICATION_LIST_ENDPOINT, auth_required=True)
        applications = map_items(data, map_application, "applications")
        _LOGGER.debug(
            "Service %s list_applications completed count=%s", self.name, len(applications)
        )
        return applications

    async def approve(self, application_id: str) -> None:
        await self._decide(application_id, "approved")

    async def reject(self, application_id: str) -> None:
        await self._decide(application_id, "rejected")

    async def _decide(self, application_id: str, decision: str) -> None:
        if decision not in _DECISIONS:
            raise ValidationError(f"Unknown application decision {decision!r}.")
        application_id_value = self._require_id(application_id, "application_id")
        _LOGGER.debug("Service %s %s application", self.name, decision)
        await self._request_text(
            "PATCH",
            APPLICATION_DECISION_ENDPOINT.format(
                application_id=application_id_value,
                decision=decision,
            ),
            auth_required=True,
        )
