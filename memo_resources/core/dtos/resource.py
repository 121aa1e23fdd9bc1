from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime


class ResourceResponse(BaseModel):
    id: int
    created_ts: datetime
    filename: str
    external_link: str
    type: str
    size: int
    memo_id: Optional[int] = None


class ResourceCreate(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    external_link: str = ""
    type: str = ""
    size: int = Field(0, ge=0)
    memo_id: Optional[int] = None


class ResourcePatch(BaseModel):
    filename: Optional[str] = Field(None, min_length=1, max_length=255)
    memo_id: Optional[int] = None


class UpdateResourceRequest(BaseModel):
    resource: ResourcePatch = Field(default_factory=ResourcePatch)
    update_mask: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_masked_filename(self):
        if "filename" in self.update_mask and self.resource.filename is None:
            raise ValueError("filename is required when update_mask contains it")
        return self


class ListResourcesResponse(BaseModel):
    resources: List[ResourceResponse]


class ResourceEnvelope(BaseModel):
    resource: ResourceResponse


class DeleteResourceResponse(BaseModel):
    pass
