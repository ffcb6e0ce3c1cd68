class GatewayError(Exception):
    """Базовая ошибка при работе с веб-интерфейсом шлюза."""


class MissingCredentialError(GatewayError):
    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Missing environment variable: {variable}")


class CsrfTokenMissingError(GatewayError):
    def __init__(self):
        super().__init__("Failed to locate csrfp_token from client cookies. Ensure valid credentials were used.")


class MalformedStatusError(GatewayError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        message = "Received invalid response from router."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
