"""Request validation for the transcription endpoint.

Only presence of the two required fields is checked. Malformed URLs or keys
are left to fail downstream.
"""

from pydantic import ValidationError

from transcriber.errors import InvalidRequest, MissingField
from transcriber.models.transcription import TranscriptionRequest


def validate_request(payload: object) -> TranscriptionRequest:
    """Turn a decoded JSON body into a ``TranscriptionRequest``.

    A body that is not a JSON object carries no fields, so it fails the
    ``audioUrl`` check like an empty one.

    Raises:
        MissingField: ``audioUrl`` or ``openaiApiKey`` is absent or empty.
        InvalidRequest: ``participants`` (or another field) has the wrong shape.
    """
    if not isinstance(payload, dict):
        payload = {}

    if not payload.get("audioUrl"):
        raise MissingField("audioUrl is required")
    if not payload.get("openaiApiKey"):
        raise MissingField("openaiApiKey is required")

    data = dict(payload)
    # Falsy optional fields behave as if they were never sent
    if not data.get("meetingName"):
        data.pop("meetingName", None)
    if not data.get("participants"):
        data.pop("participants", None)

    try:
        return TranscriptionRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidRequest("Invalid request body") from e
