import logging
from typing import List, Optional

from apiclients.sources.client.gusto.gusto import GustoClient
from apiclients.sources.client.http.decoding import decode_list, decode_model
from apiclients.sources.client.http.http_request import HTTPRequest
from apiclients.sources.client.http.pagination import LinkHeaderPagination, fetch_all
from apiclients.sources.client.http.query import QueryBuilder
from apiclients.sources.external.gusto.models import PaySchedule, PayScheduleUpdateRequest

# Gusto pages with ?page=N&per=M and advertises the next page in the Link header
PAGE_PAGINATION = LinkHeaderPagination(param="page")


class GustoDataSource:
    """Gusto payroll API wrapper (pay schedules)."""

    def __init__(self, client: GustoClient, logger: Optional[logging.Logger] = None) -> None:
        self._client = client.get_client()
        try:
            self.base_url = self._client.get_base_url().rstrip("/")
        except AttributeError as exc:
            raise ValueError("HTTP client does not have get_base_url method") from exc
        self.logger = logger or logging.getLogger(__name__)

    def get_data_source(self) -> "GustoDataSource":
        return self

    def _pay_schedules_request(self, company_id: str, page: Optional[int], per: Optional[int]) -> HTTPRequest:
        return HTTPRequest(
            method="GET",
            url=self.base_url + "/v1/companies/{company_id}/pay_schedules",
            path_params={"company_id": company_id},
            query_params=QueryBuilder().add_positive("page", page).add_positive("per", per).build(),
        )

    async def get_pay_schedules(
        self,
        company_id: str,
        page: Optional[int] = None,
        per: Optional[int] = None,
    ) -> List[PaySchedule]:
        """Get the pay schedules for a company (one page).
        HTTP GET /v1/companies/{company_id}/pay_schedules

        A company can have multiple pay schedules; each captures when employees
        work and when they should be paid.
        """
        request = self._pay_schedules_request(company_id, page, per)
        return decode_list(await self._client.execute(request), PaySchedule)

    async def get_all_pay_schedules(self, company_id: str, per: Optional[int] = None) -> List[PaySchedule]:
        """Get every pay schedule for a company, following the Link header to the last page."""
        request = self._pay_schedules_request(company_id, None, per)
        return await fetch_all(self._client, request, PAGE_PAGINATION, PaySchedule, self.logger)

    async def get_pay_schedule(self, company_id_or_uuid: str, pay_schedule_id_or_uuid: str) -> PaySchedule:
        """Get a pay schedule.
        HTTP GET /v1/companies/{company_id_or_uuid}/pay_schedules/{pay_schedule_id_or_uuid}
        """
        request = HTTPRequest(
            method="GET",
            url=self.base_url + "/v1/companies/{company_id_or_uuid}/pay_schedules/{pay_schedule_id_or_uuid}",
            path_params={
                "company_id_or_uuid": company_id_or_uuid,
                "pay_schedule_id_or_uuid": pay_schedule_id_or_uuid,
            },
        )
        return decode_model(await self._client.execute(request), PaySchedule)

    async def update_pay_schedule(
        self,
        company_id_or_uuid: str,
        pay_schedule_id_or_uuid: str,
        body: PayScheduleUpdateRequest,
    ) -> PaySchedule:
        """Update a pay schedule (beta endpoint on Gusto's side).
        HTTP PUT /v1/companies/{company_id_or_uuid}/pay_schedules/{pay_schedule_id_or_uuid}
        """
        request = HTTPRequest(
            method="PUT",
            url=self.base_url + "/v1/companies/{company_id_or_uuid}/pay_schedules/{pay_schedule_id_or_uuid}",
            headers={"Content-Type": "application/json"},
            path_params={
                "company_id_or_uuid": company_id_or_uuid,
                "pay_schedule_id_or_uuid": pay_schedule_id_or_uuid,
            },
            body=body.model_dump(exclude_none=True),
        )
        return decode_model(await self._client.execute(request), PaySchedule)
