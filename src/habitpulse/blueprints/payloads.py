"""Request body parsing shared by the JSON blueprints."""

from __future__ import annotations

from typing import TypeVar

from flask import request
from pydantic import BaseModel, ValidationError

from ..errors import InvalidInput

FormT = TypeVar("FormT", bound=BaseModel)


def read_payload(form_cls: type[FormT]) -> FormT:
    """Validate the JSON body against ``form_cls``; raise ``InvalidInput`` on failure."""

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("Expected a JSON object body")
    try:
        return form_cls.model_validate(data)
    except ValidationError as exc:
        raise InvalidInput.from_validation_error(exc) from exc
