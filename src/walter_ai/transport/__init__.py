from walter_ai.transport.http import DEFAULT_BASE_URL, HttpTransport

__all__ = ["DEFAULT_BASE_URL", "HttpTransport"]
