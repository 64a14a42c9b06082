"""Health payload: database reachability and whether plant photos can be uploaded."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: Literal["ok"] = "ok"
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
    image_storage: Literal["configured", "not_configured"] = Field(
        description="Cloudinary credentials present; plant creation with an image needs them",
    )
