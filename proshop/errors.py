# proshop/errors.py
from typing import Optional


class StoreError(Exception):
    """Base for every failure the store layer reports to the routes."""

    status_code = 500
    message = "Server Error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFound(StoreError):
    status_code = 404

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} Not Found")


class StoreUnavailable(StoreError):
    status_code = 500
    message = "Server Error"


class ValidationFailure(StoreError):
    status_code = 400
    message = "Invalid data"
