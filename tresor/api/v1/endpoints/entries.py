"""Entry endpoints: store, get, get-many. All require a dashboard JWT.

Bodies are read raw and validated per operation (single ops use the small
limits, get-many the batch limits).
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response

from tresor.api.v1.dependencies import (
    get_current_user,
    get_entry_service,
    json_body,
    unwrap,
)
from tresor.application.dtos.identity import AuthenticatedUser
from tresor.application.services.request_parser import RequestSpec, parse_path_templates
from tresor.application.use_cases.entries import EntryService
from tresor.core.config import Settings, get_settings
from tresor.core.limiter import limit_batch_reads, limit_writes
from tresor.schemas.entry import (
    EntryValueResponse,
    GetEntryRequest,
    GetManyRequest,
    GetManyResponse,
    StoreEntryRequest,
)

router = APIRouter()


def _body_doc(model: type) -> dict[str, Any]:
    """openapi_extra for routes that parse their JSON body themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def store_spec(settings: Settings) -> RequestSpec:
    return RequestSpec(
        required_keys=("path", "key", "value"),
        types={"value": (str, type(None))},
        max_body_length=settings.max_body_length,
        max_string_length=settings.max_string_length,
    )


def get_spec(settings: Settings) -> RequestSpec:
    return RequestSpec(
        required_keys=("path", "key"),
        max_body_length=settings.max_body_length,
        max_string_length=settings.max_string_length,
    )


def get_many_spec(settings: Settings) -> RequestSpec:
    return RequestSpec(
        required_keys=("path_arrays", "key"),
        types={"path_arrays": list},
        max_body_length=settings.batch_max_body_length,
        max_string_length=settings.batch_max_string_length,
    )


@router.post(
    "/store",
    status_code=204,
    response_class=Response,
    openapi_extra=_body_doc(StoreEntryRequest),
)
@limit_writes
async def store_entry(
    request: Request,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    data: Annotated[dict[str, Any], Depends(json_body(store_spec))],
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> Response:
    """Write value under (path, key) as the caller. Blank value clears the entry."""
    await service.store_entry(
        current_user.email, data["path"], data["key"], data["value"]
    )
    return Response(status_code=204)


@router.post(
    "/get",
    response_model=EntryValueResponse,
    openapi_extra=_body_doc(GetEntryRequest),
)
async def get_entry(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    data: Annotated[dict[str, Any], Depends(json_body(get_spec))],
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> EntryValueResponse:
    """Return the current value under (path, key), or null."""
    return EntryValueResponse(value=service.get_entry(data["path"], data["key"]))


@router.post(
    "/get-many",
    response_model=GetManyResponse,
    openapi_extra=_body_doc(GetManyRequest),
)
@limit_batch_reads
async def get_many(
    request: Request,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    data: Annotated[dict[str, Any], Depends(json_body(get_many_spec))],
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> GetManyResponse:
    """Return one nested result per path array (shape = its list dimensions)."""
    settings = get_settings()
    templates = unwrap(
        parse_path_templates(data["path_arrays"], settings.batch_max_combinations)
    )
    return GetManyResponse(results=service.get_many(templates, data["key"]))
