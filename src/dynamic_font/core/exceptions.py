"""Custom exceptions for the dynamic font loader."""

from typing import Any


class DynamicFontError(Exception):
    """Base exception for all dynamic font errors."""

    kind = "error"

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ValidationError(DynamicFontError):
    """Exception raised for input validation errors."""

    kind = "validation"


class ConfigurationError(DynamicFontError):
    """Exception raised for configuration errors."""

    kind = "configuration"


class FontSourceError(DynamicFontError):
    """Exception raised when a local font source cannot be read."""


class DownloadError(DynamicFontError):
    """Exception raised when a remote font cannot be fetched."""

    kind = "download"


class CacheError(DynamicFontError):
    """Exception raised for cache directory operation errors."""

    kind = "cache"


# Acquisition errors
class AssetLoadError(FontSourceError):
    """Exception raised when a bundled asset key cannot be loaded."""

    kind = "asset_load"

    def __init__(self, key: str, error: str | None = None):
        message = f"Failed to load font asset: {key}"
        if error:
            message = f"{message} ({error})"
        super().__init__(message, details={"key": key, "error": error})
        self.key = key


class FontFileNotFoundError(FontSourceError):
    """Exception raised when a font file does not exist."""

    kind = "file_not_found"

    def __init__(self, path: str):
        super().__init__(f"Font file not found: {path}", details={"path": path})
        self.path = path


class FontFileReadError(FontSourceError):
    """Exception raised when a font file exists but cannot be read."""

    kind = "file_read"

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to read font file {path}: {error}", details={"path": path})
        self.path = path


class InvalidFontUrlError(ValidationError):
    """Exception raised when a URL has no final path segment to cache under."""

    kind = "invalid_url"

    def __init__(self, url: str):
        super().__init__(f"URL has no file name to cache under: {url}", details={"url": url})
        self.url = url


# Download errors
class HttpStatusError(DownloadError):
    """Exception raised when the server answers with a non-200 status."""

    kind = "http_status"

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Unexpected status code {status_code} for {url}",
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class DownloadTimeoutError(DownloadError, TimeoutError):
    """Exception raised when no response arrives within the response timeout."""

    kind = "timeout"

    def __init__(self, url: str, timeout: float):
        super().__init__(
            f"No response from {url} within {timeout:g} seconds",
            details={"url": url, "timeout": timeout},
        )
        self.url = url
        self.timeout = timeout


class TransportError(DownloadError):
    """Exception raised for connection and stream failures."""

    kind = "transport"

    def __init__(self, url: str, error: str):
        super().__init__(f"Transport error for {url}: {error}", details={"url": url})
        self.url = url


# Cache errors
class CacheWriteError(CacheError):
    """Exception raised when downloaded bytes cannot be persisted."""

    kind = "cache_write"

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to write font cache file {path}: {error}", details={"path": path})
        self.path = path


class CacheReadError(CacheError):
    """Exception raised when a cached font file cannot be read back."""

    kind = "cache_read"

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to read font cache file {path}: {error}", details={"path": path})
        self.path = path


class RegistrationError(DynamicFontError):
    """Exception raised when the font engine rejects a payload."""

    kind = "registration"

    def __init__(self, family: str, error: str):
        super().__init__(
            f"Failed to register font family '{family}': {error}", details={"family": family}
        )
        self.family = family


# Configuration errors
class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")
