"""
Pydantic schemas for job record endpoints.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StringConstraints

JobId = Union[
    Annotated[str, StringConstraints(strict=True, min_length=1)],
    StrictInt,
]


class BulkDeleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_ids: list[JobId] = Field(..., alias="jobIds", min_length=1)


class MessageResponse(BaseModel):
    message: str
