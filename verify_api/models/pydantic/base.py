from pydantic import BaseModel, ConfigDict


class BaseORMRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class OpenBaseModel(BaseModel):
    """Model output may carry fields we do not know about, keep them."""

    model_config = ConfigDict(extra="allow")
