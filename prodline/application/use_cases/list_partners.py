"""List Partners Use Case: catalog passthrough for workshops and cutters."""

from prodline.application.dto.responses import PartnerListResponse, PartnerResponse
from prodline.application.use_cases.base import OrderUseCase
from prodline.core.entities.catalog import Partner, PartnerType


class ListPartnersUseCase(OrderUseCase):
    async def execute(self, partner_type: PartnerType | None = None) -> list[Partner]:
        catalog = await self._get_catalog()
        return await catalog.list_partners(partner_type)

    def to_response(self, partners: list[Partner]) -> PartnerListResponse:
        return PartnerListResponse(
            partners=[
                PartnerResponse(
                    id=p.id,
                    name=p.name,
                    type=p.type.value,
                    contract_type=p.contract_type,
                    phone=p.phone,
                    default_rate=p.default_rate,
                )
                for p in partners
            ],
            total=len(partners),
        )
