# api/errors.py
"""
Application errors raised by the earthquake service.

Each carries the GraphQL extension code it is reported under.
"""


class EarthquakeError(Exception):
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EarthquakeError):
    code = "BAD_USER_INPUT"


class NotFound(EarthquakeError):
    code = "NOT_FOUND"

    def __init__(self, earthquake_id: int):
        super().__init__(f"Earthquake with ID {earthquake_id} not found")
        self.earthquake_id = earthquake_id


class InternalError(EarthquakeError):
    code = "INTERNAL_SERVER_ERROR"
