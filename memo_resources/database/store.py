from typing import Optional, List
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from memo_resources.database.models.memo import Memo
from memo_resources.database.models.resource import Resource


class StoreError(Exception):
    pass


class FindResource(BaseModel):
    id: Optional[int] = None
    creator_id: Optional[int] = None


class CreateResource(BaseModel):
    creator_id: int
    filename: str
    external_link: str = ""
    type: str = ""
    size: int = 0
    memo_id: Optional[int] = None


class UpdateResource(BaseModel):
    """Partial update; only fields passed to the constructor are written."""

    id: int
    updated_ts: Optional[int] = None
    filename: Optional[str] = None
    memo_id: Optional[int] = None


class DeleteResource(BaseModel):
    id: int


class FindMemo(BaseModel):
    id: Optional[int] = None
    creator_id: Optional[int] = None


class Store:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_resources(self, find: FindResource) -> List[Resource]:
        query = select(Resource).order_by(Resource.id)

        if find.id is not None:
            query = query.where(Resource.id == find.id)
        if find.creator_id is not None:
            query = query.where(Resource.creator_id == find.creator_id)

        resources = await self.session.scalars(query)
        return list(resources)

    async def get_resource(self, find: FindResource) -> Optional[Resource]:
        resources = await self.list_resources(find)
        if not resources:
            return None
        return resources[0]

    async def create_resource(self, create: CreateResource) -> Resource:
        resource = Resource(**create.model_dump())

        self.session.add(resource)
        await self.session.commit()
        await self.session.refresh(resource)

        return resource

    async def update_resource(self, update: UpdateResource) -> Resource:
        resource = await self.session.get(Resource, update.id)
        if resource is None:
            raise StoreError(f"resource {update.id} does not exist")

        for field, value in update.model_dump(exclude_unset=True, exclude={"id"}).items():
            setattr(resource, field, value)

        await self.session.commit()
        await self.session.refresh(resource)

        return resource

    async def delete_resource(self, delete: DeleteResource) -> None:
        resource = await self.session.get(Resource, delete.id)
        if resource is None:
            raise StoreError(f"resource {delete.id} does not exist")

        await self.session.delete(resource)
        await self.session.commit()

    async def get_memo(self, find: FindMemo) -> Optional[Memo]:
        query = select(Memo)

        if find.id is not None:
            query = query.where(Memo.id == find.id)
        if find.creator_id is not None:
            query = query.where(Memo.creator_id == find.creator_id)

        return await self.session.scalar(query.limit(1))
