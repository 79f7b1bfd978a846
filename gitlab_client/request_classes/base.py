from pydantic import BaseModel, ConfigDict


class BaseModelRequest(BaseModel):
    """Base class for query objects.

    Queries are immutable once created, and unknown options are rejected so that a
    misspelled filter fails before any request is sent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)
