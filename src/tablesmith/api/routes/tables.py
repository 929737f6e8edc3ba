"""Table provisioning API routes."""

import logging

from fastapi import APIRouter, Response

from tablesmith.dependencies import Provisioner
from tablesmith.models.table import TableSpec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tables"])


@router.post("/tables")
async def create_table(spec: TableSpec, provisioner: Provisioner) -> dict:
    created = await provisioner.create_table(spec)
    logger.info(
        "table_created",
        extra={"table": created.name, "columns": created.column_names()},
    )
    return created.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.delete("/tables/{name}", status_code=204)
async def drop_table(name: str, provisioner: Provisioner) -> Response:
    await provisioner.drop_table(name)
    logger.info("table_dropped", extra={"table": name})
    return Response(status_code=204)
