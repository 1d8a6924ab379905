class VolunteerApiError(Exception):
    """Error rendered to the caller as ``{"error": message}`` with ``status_code``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(VolunteerApiError):
    status_code = 400


class ServerError(VolunteerApiError):
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
