"""Resource hub endpoint."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from manas_mitra.resources import Resource, filter_resources

router = APIRouter(prefix="/resources", tags=["resources"])


class ResourceResponse(BaseModel):
    name: str
    description: str
    modalities: list[str]
    timing: str
    website: str
    whatsapp: str | None = None

    @classmethod
    def from_resource(cls, resource: Resource) -> "ResourceResponse":
        return cls(
            name=resource.name,
            description=resource.description,
            modalities=sorted(resource.modalities),
            timing=resource.timing,
            website=resource.website,
            whatsapp=resource.whatsapp,
        )


@router.get("", response_model=list[ResourceResponse])
async def list_resources(
    modality: Literal["all", "call", "chat"] = "all",
    timing: Literal["all", "24/7", "daytime"] = "all",
) -> list[ResourceResponse]:
    """
    List support organisations.

    Args:
        modality: "call", "chat" or "all"
        timing: "24/7", "daytime" or "all"
    """
    return [ResourceResponse.from_resource(r) for r in filter_resources(modality, timing)]
