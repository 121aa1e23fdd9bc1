from typing import Optional, List, Protocol
from datetime import datetime, timezone
import logging

from fastapi import HTTPException

from memo_resources.core.dtos.resource import (
    ResourceCreate,
    ResourcePatch,
    ResourceResponse
)
from memo_resources.core.errors import InternalError, NotFoundError
from memo_resources.database.database import unix_now
from memo_resources.database.models.resource import Resource
from memo_resources.database.models.user import User
from memo_resources.database.store import (
    Store,
    CreateResource,
    DeleteResource,
    FindMemo,
    FindResource,
    UpdateResource
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("filename", "memo_id")

# Row ids are SQLite 64-bit INTEGER primary keys.
MAX_ROW_ID = 2 ** 63 - 1


class PrincipalResolver(Protocol):
    async def __call__(self) -> User: ...


class ResourceService:
    """Resource metadata operations scoped to the requesting user.

    Store failures surface as ``InternalError``; lookups that find no row
    owned by the caller surface as ``NotFoundError``. Authentication
    rejections raised by the principal resolver propagate unchanged.
    """

    def __init__(self, store: Store, current_principal: PrincipalResolver):
        self.store = store
        self.current_principal = current_principal

    async def list_resources(self) -> List[ResourceResponse]:
        user = await self._current_user()

        try:
            resources = await self.store.list_resources(
                FindResource(creator_id=user.id)
            )
        except Exception as exc:
            logger.exception("Failed to list resources for user %s", user.id)
            raise InternalError(f"failed to list resources: {exc}") from exc

        return [await self.convert_resource_from_store(resource) for resource in resources]

    async def get_resource(self, resource_id: int) -> ResourceResponse:
        user = await self._current_user()
        resource = await self._find_owned_resource(resource_id, user)
        return await self.convert_resource_from_store(resource)

    async def create_resource(self, data: ResourceCreate) -> ResourceResponse:
        user = await self._current_user()
        if data.memo_id is not None:
            await self._find_owned_memo(data.memo_id, user)

        try:
            resource = await self.store.create_resource(
                CreateResource(creator_id=user.id, **data.model_dump())
            )
        except Exception as exc:
            logger.exception("Failed to create resource for user %s", user.id)
            raise InternalError(f"failed to create resource: {exc}") from exc

        logger.info("User %s created resource %s", user.id, resource.id)
        return await self.convert_resource_from_store(resource)

    async def update_resource(
        self,
        resource_id: int,
        patch: ResourcePatch,
        update_mask: List[str]
    ) -> ResourceResponse:
        fields = {"id": resource_id, "updated_ts": unix_now()}
        for field in update_mask:
            if field in UPDATABLE_FIELDS:
                fields[field] = getattr(patch, field)
        update = UpdateResource(**fields)

        user = await self._current_user()
        await self._find_owned_resource(resource_id, user)
        if update.memo_id is not None:
            await self._find_owned_memo(update.memo_id, user)

        try:
            resource = await self.store.update_resource(update)
        except Exception as exc:
            logger.exception("Failed to update resource %s", resource_id)
            raise InternalError(f"failed to update resource: {exc}") from exc

        return await self.convert_resource_from_store(resource)

    async def delete_resource(self, resource_id: int) -> None:
        user = await self._current_user()
        resource = await self._find_owned_resource(resource_id, user)

        try:
            await self.store.delete_resource(DeleteResource(id=resource.id))
        except Exception as exc:
            logger.exception("Failed to delete resource %s", resource_id)
            raise InternalError(f"failed to delete resource: {exc}") from exc

        logger.info("User %s deleted resource %s", user.id, resource_id)

    async def convert_resource_from_store(self, resource: Resource) -> ResourceResponse:
        memo_id: Optional[int] = None
        if resource.memo_id is not None:
            # A dangling or unreadable memo reference is reported as no memo.
            try:
                memo = await self.store.get_memo(FindMemo(id=resource.memo_id))
            except Exception as exc:
                logger.warning(
                    "Memo %s of resource %s could not be loaded: %s",
                    resource.memo_id, resource.id, exc
                )
                memo = None
            if memo is not None:
                memo_id = memo.id

        return ResourceResponse(
            id=resource.id,
            created_ts=datetime.fromtimestamp(resource.created_ts, tz=timezone.utc),
            filename=resource.filename,
            external_link=resource.external_link,
            type=resource.type,
            size=resource.size,
            memo_id=memo_id
        )

    async def _current_user(self) -> User:
        try:
            return await self.current_principal()
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to resolve current user")
            raise InternalError(f"failed to get current user: {exc}") from exc

    async def _find_owned_resource(self, resource_id: int, user: User) -> Resource:
        if not 1 <= resource_id <= MAX_ROW_ID:
            raise NotFoundError("resource not found")

        try:
            resource = await self.store.get_resource(
                FindResource(id=resource_id, creator_id=user.id)
            )
        except Exception as exc:
            logger.exception("Failed to find resource %s", resource_id)
            raise InternalError(f"failed to find resource: {exc}") from exc

        if resource is None:
            raise NotFoundError("resource not found")
        return resource

    async def _find_owned_memo(self, memo_id: int, user: User) -> None:
        if not 1 <= memo_id <= MAX_ROW_ID:
            raise NotFoundError("memo not found")

        try:
            memo = await self.store.get_memo(FindMemo(id=memo_id, creator_id=user.id))
        except Exception as exc:
            logger.exception("Failed to find memo %s", memo_id)
            raise InternalError(f"failed to find memo: {exc}") from exc

        if memo is None:
            raise NotFoundError("memo not found")
