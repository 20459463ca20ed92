from enum import Enum
from typing import List, Optional


class Issue(str, Enum):
    MALFORMED_BODY = "MalformedBody"
    DISALLOWED_FIELDS = "DisallowedFields"
    MISSING_CODE = "MissingCode"
    INVALID_CODE = "InvalidCode"
    CODE_MISMATCH = "CodeMismatch"
    MISSING_NAME = "MissingName"
    MISSING_PRICE = "MissingPrice"
    INVALID_PRICE = "InvalidPrice"
    MISSING_CATEGORY = "MissingCategory"


class ApiError(Exception):
    """Error con respuesta conocida para el cliente: status + mensaje."""

    status_code = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class ValidationError(ApiError):
    status_code = 400

    def __init__(self, issue: Issue, msg: str, fields: Optional[List[str]] = None):
        super().__init__(msg)
        self.issue = issue
        self.fields = fields or []


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    # codigo duplicado; el servicio siempre lo informó como 400
    status_code = 400


class StoreError(ApiError):
    status_code = 500
