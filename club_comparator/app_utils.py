from typing import Any, Dict, Optional

from flask import jsonify

from .errors import DataError

# DataError codes mapped to HTTP status; anything else is a server-side failure.
_DATA_ERROR_STATUS = {
    "NOT_FOUND": 404,
    "INVALID_IMPORT": 422,
}


def _build_success_payload(data: Optional[Any], message: str) -> Dict[str, Any]:
    return {
        "status": "ok",
        "message": message,
        "data": data,
    }


def _build_error_payload(error: Any, message: str) -> Dict[str, Any]:
    return {
        "status": "error",
        "message": message,
        "error": error,
    }


def make_ok(data: Optional[Any] = None, message: str = "success", status_code: int = 200):
    """Return a standardized success response."""
    payload = _build_success_payload(data, message)
    response = jsonify(payload)
    return response, status_code


def make_error(error: Any, message: str = "An error occurred", status_code: int = 400):
    """Return a standardized error response."""
    if isinstance(error, DataError):
        error = error.to_dict()

    payload = _build_error_payload(error, message)
    response = jsonify(payload)
    return response, status_code


def data_error_response(err: DataError):
    """Translate a DataError into an error envelope with a matching status."""
    status_code = _DATA_ERROR_STATUS.get(err.code, 500)
    return make_error(err, err.message, status_code=status_code)
