from __future__ import annotations

from desguace_catalog.domain.pagination import PageInfo, Paging
from desguace_catalog.entrypoints.http.dtos.pagination import PaginationDTO, PagingQueryDTO


class PaginationMapper:
    @staticmethod
    def to_domain_paging(dto: PagingQueryDTO) -> Paging:
        return Paging(page=dto.page, limit=dto.limit)

    @staticmethod
    def to_response(info: PageInfo) -> PaginationDTO:
        return PaginationDTO(
            page=info.page,
            limit=info.limit,
            total=info.total,
            total_pages=info.total_pages,
        )
