"""
LOS Python Client - Applications Resource

This module provides methods for managing loan applications.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from losclient.config import Endpoints
from losclient.encoding import encode_query
from losclient.models import (
    Application,
    CreateApplicationParams,
    CreateBorrowerParams,
    CreateIntermediaryParams,
    FindApplicationsParams,
    ListApplicationParams,
    UpdateApplicationParams,
    to_wire,
)
from losclient.pagination import CursorPaginationResult, PaginationResult
from losclient.resources.base import SystemResource


class ApplicationsResource(
    SystemResource[
        Application,
        CreateApplicationParams,
        UpdateApplicationParams,
        FindApplicationsParams,
        ListApplicationParams,
    ]
):
    """
    Resource for managing loan applications.

    ``find`` works for every API version. ``search`` and ``list`` require a
    client bound to a non-legacy version.

    Example:
        >>> client = LosClient(api_key="...", api_version=ApiVersion.CURRENT)
        >>> result = await client.applications.find(
        ...     FindApplicationsParams(
        ...         status_ids=["st_new", "st_review"],
        ...         filter_by_variables={"loan_amount": Range(from_=1000, to=5000)},
        ...     )
        ... )
        >>> for application in result:
        ...     print(application.display_id, application.loan_amount)
    """

    path = Endpoints.APPLICATIONS
    model = Application

    async def find(self, params: FindApplicationsParams) -> PaginationResult[Application]:
        return await super().find(params)

    async def list(
        self,
        params: Optional[ListApplicationParams] = None,
    ) -> CursorPaginationResult[Application]:
        return await super().list(params)

    async def update_co_borrowers(
        self,
        application_id: str,
        co_borrower_id_to_delete: Optional[str] = None,
        co_borrowers_to_add: Optional[List[Union[str, CreateBorrowerParams]]] = None,
    ) -> Application:
        """
        Remove one co-borrower or add new ones.

        Exactly one of ``co_borrower_id_to_delete`` and
        ``co_borrowers_to_add`` must be given.
        """
        if (co_borrower_id_to_delete is None) == (co_borrowers_to_add is None):
            raise ValueError(
                "Provide exactly one of co_borrower_id_to_delete or co_borrowers_to_add"
            )

        if co_borrower_id_to_delete is not None:
            body: Dict[str, Any] = {"coBorrowerIdToDelete": co_borrower_id_to_delete}
        else:
            body = {"coBorrowersToAdd": to_wire(co_borrowers_to_add)}

        payload = await self._put(self._resource_path(application_id, "coborrowers"), body)
        return self._parse_item(payload)

    async def update_intermediary(
        self,
        application_id: str,
        intermediary: Optional[Union[str, CreateIntermediaryParams]],
    ) -> Application:
        """Attach, replace or (with ``None``) detach the intermediary."""
        body = {"intermediary": to_wire(intermediary)}
        payload = await self._put(self._resource_path(application_id, "intermediary"), body)
        return self._parse_item(payload)

    async def get_variables(
        self,
        application_id: str,
        variables_to_include: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Get an application's variable values.

        Args:
            application_id: The application's unique identifier
            variables_to_include: Restrict the result to these variables

        Returns:
            Mapping of variable system name to value
        """
        query = encode_query({"variablesToInclude": variables_to_include})
        return await self._get(self._resource_path(application_id, "variables"), query)

    async def run_calculations(
        self,
        application_id: str,
        variables_to_run: Optional[List[str]] = None,
    ) -> Application:
        body: Dict[str, Any] = {}
        if variables_to_run is not None:
            body["variablesToRun"] = variables_to_run

        payload = await self._post(self._resource_path(application_id, "run-calculations"), body)
        return self._parse_item(payload)

    async def add_labels(self, application_id: str, labels_ids: List[str]) -> Application:
        payload = await self._post(
            self._resource_path(application_id, "labels"),
            {"labelsIds": labels_ids},
        )
        return self._parse_item(payload)

    async def add_team_members(self, application_id: str, team_members_ids: List[str]) -> Application:
        payload = await self._post(
            self._resource_path(application_id, "team-members"),
            {"teamMembersIds": team_members_ids},
        )
        return self._parse_item(payload)
