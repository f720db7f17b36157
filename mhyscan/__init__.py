"""QR-code login helpers: JSON values, request signing, HTTP, config storage and logging."""

__version__ = "0.1.0"
__all__ = ["config", "cryptokit", "httpclient", "jsonvalue", "log", "mihoyosdk"]