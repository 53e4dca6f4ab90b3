"""Common schema primitives."""

from typing import Annotated

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def require_http_url(value: str) -> str:
    """Accept blank values or absolute ``http``/``https`` URLs with a host.

    Parameters
    ----------
    value : str
        Trimmed input.

    Returns
    -------
    str
        The input unchanged.
    """
    if not value:
        return value
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url_invalid", "must be a valid URL") from None
    return value


Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Text = Annotated[str, StringConstraints(strip_whitespace=True, max_length=4000)]
Url = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=2048),
    AfterValidator(require_http_url),
]
RequiredUrl = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=2048),
    AfterValidator(require_http_url),
]


class APIModel(BaseModel):
    """Base API model with attribute validation enabled."""

    model_config = ConfigDict(from_attributes=True)


class RequestModel(BaseModel):
    """Base request body; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


class OkResponse(APIModel):
    """Successful response envelope."""

    ok: bool = True
