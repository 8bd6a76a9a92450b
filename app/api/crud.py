"""Router factory for the standard create/list/get/update/delete surface of one entity kind"""
from typing import Dict, List, Optional, Sequence, Type

from fastapi import APIRouter, Depends, Header, Query, Request
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy import Boolean

from app.core.audit_decorator import audit_log
from app.core.enums import AuditAction
from app.core.errors import InvalidInput
from app.core.rate_limit import check_rate_limit
from app.core.security import get_current_user, require_writer
from app.db.session import get_store
from app.db.store import EntityStore
from app.schemas.common import APIModel, Deleted
from app.services.entities import EntityService
from app.utils.idempotency import get_idempotent, set_idempotent


def parse_filters(request: Request, model, fields: Sequence[str]) -> Dict[str, object]:
    """Equality filters from the query string; ``customerId`` and ``customer_id`` both work."""
    filters = {}
    for field in fields:
        raw = request.query_params.get(to_camel(field), request.query_params.get(field))
        if raw is None:
            continue
        column = model.__table__.columns[field]
        if isinstance(column.type, Boolean):
            if raw.lower() not in ("true", "false"):
                raise InvalidInput(f"{field} filter must be true or false", field=field)
            filters[field] = raw.lower() == "true"
        elif column.foreign_keys:
            try:
                filters[field] = int(raw)
            except ValueError:
                raise InvalidInput(f"{field} filter must be an integer", field=field)
        else:
            filters[field] = raw
    return filters


def build_crud_router(
    prefix: str,
    tags: List[str],
    service: EntityService,
    create_schema: Type[APIModel],
    update_schema: Type[APIModel],
    out_schema: Type[APIModel],
    filters: Sequence[str] = (),
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags)
    singular = service.kind.lower()

    @router.post("", response_model=out_schema, status_code=201)
    @audit_log(AuditAction.CREATE, f"create_{singular}")
    async def create_entity(
        payload: create_schema,
        idempotency_key: Optional[str] = Header(None),
        store: EntityStore = Depends(get_store),
        current_user=Depends(require_writer),
    ):
        await check_rate_limit(current_user.id)

        prev = await get_idempotent(prefix, idempotency_key)
        if prev:
            return JSONResponse(status_code=201, content=prev)

        entity = await service.create(store, payload.model_dump(exclude_unset=True))
        out = out_schema.model_validate(entity)
        await set_idempotent(prefix, idempotency_key, out.model_dump(mode="json", by_alias=True))
        return out

    @router.get("", response_model=List[out_schema])
    async def list_entities(
        request: Request,
        limit: Optional[int] = Query(None, ge=1, le=1000),
        offset: int = Query(0, ge=0),
        store: EntityStore = Depends(get_store),
        current_user=Depends(get_current_user),
    ):
        criteria = parse_filters(request, service.model, filters)
        entities = await service.list(store, filters=criteria, limit=limit, offset=offset)
        return [out_schema.model_validate(entity) for entity in entities]

    @router.get("/{entity_id}", response_model=out_schema)
    async def get_entity(
        entity_id: int,
        store: EntityStore = Depends(get_store),
        current_user=Depends(get_current_user),
    ):
        return out_schema.model_validate(await service.get(store, entity_id))

    @router.put("/{entity_id}", response_model=out_schema)
    @audit_log(AuditAction.UPDATE, f"update_{singular}")
    async def update_entity(
        entity_id: int,
        payload: update_schema,
        store: EntityStore = Depends(get_store),
        current_user=Depends(require_writer),
    ):
        await check_rate_limit(current_user.id)
        entity = await service.update(store, entity_id, payload.model_dump(exclude_unset=True))
        return out_schema.model_validate(entity)

    @router.delete("/{entity_id}", response_model=Deleted)
    @audit_log(AuditAction.DELETE, f"delete_{singular}")
    async def delete_entity(
        entity_id: int,
        store: EntityStore = Depends(get_store),
        current_user=Depends(require_writer),
    ):
        await check_rate_limit(current_user.id)
        cleared = await service.delete(store, entity_id)
        return Deleted(cleared_references=cleared)

    return router
