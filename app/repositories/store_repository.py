"""매장 레포지토리 — 매장 CRUD 및 관련 쿼리.

Store Repository — CRUD and related queries for stores.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.store import Store
from app.repositories.base import BaseRepository


class StoreRepository(BaseRepository[Store]):
    """매장 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the stores table.
    """

    def __init__(self) -> None:
        """StoreRepository를 초기화합니다.

        Initialize the StoreRepository with the Store model.
        """
        super().__init__(Store)

    async def get_list(
        self,
        db: AsyncSession,
        is_active: bool | None = None,
    ) -> list[Store]:
        """매장 목록을 생성 순으로 조회합니다.

        Retrieve stores in creation order, optionally filtered by active flag.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            is_active: 활성 상태 필터, None이면 전체 (Active filter; None = all)

        Returns:
            list[Store]: 매장 목록 (List of stores)
        """
        query: Select = select(Store).order_by(Store.created_at, Store.name)
        if is_active is not None:
            query = query.where(Store.is_active == is_active)
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
store_repository: StoreRepository = StoreRepository()
