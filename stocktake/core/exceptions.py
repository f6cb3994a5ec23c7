from fastapi import HTTPException
from stocktake.constants.error_codes import ErrorCode
from stocktake.utils.response import error_response


class AppException(HTTPException):
    """Expected application fault; rendered as the standard error envelope."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details

    def to_body(self) -> dict:
        return error_response(self.detail, self.error_code, self.details)
