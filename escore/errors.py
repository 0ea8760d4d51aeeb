"""Fehlerklassen der API; jede trägt ihren HTTP-Status."""


class EscoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(EscoreError):
    status_code = 400


class AuthenticationFailed(EscoreError):
    status_code = 401


class Forbidden(EscoreError):
    status_code = 403


class NotFound(EscoreError):
    status_code = 404
