"""Partner (workshop, cutter) endpoints."""

from fastapi import APIRouter, Depends, Query

from prodline.api.dependencies import get_list_partners_use_case
from prodline.application.dto.responses import PartnerListResponse
from prodline.application.use_cases import ListPartnersUseCase
from prodline.core.entities.catalog import PartnerType

router = APIRouter(prefix="/api/partners", tags=["partners"])


@router.get("", response_model=PartnerListResponse)
async def list_partners(
    partner_type: PartnerType | None = Query(default=None, alias="type"),
    use_case: ListPartnersUseCase = Depends(get_list_partners_use_case),
) -> PartnerListResponse:
    partners = await use_case.execute(partner_type)
    return use_case.to_response(partners)
