from typing import Optional, Dict
import httpx

class GatewayError(Exception):
    """A request to the hosted backend was rejected."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self):
        return f"<GatewayError(status_code={self.status_code}, message='{self.message}')>"

def error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of a gateway error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Request failed with status {response.status_code}"

    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])

    return f"Request failed with status {response.status_code}"

def raise_for_gateway(response: httpx.Response) -> None:
    if response.is_error:
        raise GatewayError(error_message(response), status_code=response.status_code)

def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
