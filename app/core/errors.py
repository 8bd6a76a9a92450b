"""Domain errors and their translation into HTTP responses"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BrokerageError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_response(self) -> dict:
        return {"detail": self.message, "error": self.code, **self.extra}


class NotFound(BrokerageError):
    status_code = 404
    code = "not_found"

    def __init__(self, kind: str, entity_id: Any) -> None:
        super().__init__(f"{kind} with id {entity_id} not found", kind=kind, id=entity_id)
        self.kind = kind
        self.entity_id = entity_id


class DuplicateKey(BrokerageError):
    status_code = 409
    code = "duplicate_key"

    def __init__(self, kind: str, field: Optional[str] = None, value: Any = None) -> None:
        if field:
            message = f"{kind} with {field} '{value}' already exists"
        else:
            message = f"{kind} violates a unique constraint"
        super().__init__(message, kind=kind, field=field)
        self.kind = kind
        self.field = field
        self.value = value


class DanglingReference(BrokerageError):
    status_code = 400
    code = "dangling_reference"

    def __init__(self, field: str, entity_id: Any) -> None:
        super().__init__(f"{field} references missing row {entity_id}", field=field, id=entity_id)
        self.field = field
        self.entity_id = entity_id


class ReferencedByDependents(BrokerageError):
    status_code = 409
    code = "referenced_by_dependents"

    def __init__(self, kind: str, entity_id: Any, dependent: str, count: int) -> None:
        super().__init__(
            f"{kind} {entity_id} is still referenced by {count} {dependent} row(s)",
            kind=kind,
            id=entity_id,
            dependent=dependent,
            count=count,
        )
        self.kind = kind
        self.entity_id = entity_id
        self.dependent = dependent
        self.count = count


class InvalidInput(BrokerageError):
    status_code = 400
    code = "invalid_input"


class InvalidStatus(BrokerageError):
    status_code = 400
    code = "invalid_status"

    def __init__(self, kind: str, field: str, value: Any, allowed: list) -> None:
        super().__init__(
            f"Invalid {field} '{value}' for {kind}. Must be one of {allowed}",
            kind=kind,
            field=field,
            allowed=allowed,
        )
        self.kind = kind
        self.field = field
        self.value = value


class InvalidTransition(InvalidStatus):
    code = "invalid_transition"

    def __init__(self, kind: str, field: str, current: str, value: str) -> None:
        BrokerageError.__init__(
            self,
            f"{kind} cannot move from terminal {field} '{current}' to '{value}'",
            kind=kind,
            field=field,
            current=current,
        )
        self.kind = kind
        self.field = field
        self.value = value


class PermissionDenied(BrokerageError):
    status_code = 403
    code = "forbidden"


class StoreUnavailable(BrokerageError):
    status_code = 503
    code = "store_unavailable"


# rejected writes counted in integrity_violations_total
INTEGRITY_ERRORS = (DuplicateKey, DanglingReference, ReferencedByDependents, InvalidStatus, InvalidInput)


async def brokerage_error_handler(request: Request, exc: BrokerageError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request payload", "error": InvalidInput.code, "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BrokerageError, brokerage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
