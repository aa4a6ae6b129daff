from typing import List, Optional, Tuple


class MediaResolverError(Exception):
    """Base for errors that reach the HTTP boundary with a fixed status and a user-facing message."""

    status_code: int = 500
    default_message: str = "Server error. Please try again shortly."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(MediaResolverError):
    status_code = 400
    default_message = "URL is required"


class InvalidDownloadUrl(MediaResolverError):
    status_code = 400
    default_message = "Resolved download URL is invalid"


class MediaUnavailable(MediaResolverError):
    status_code = 404

    MESSAGES = {
        "video": "Video is not available for this URL",
        "audio": "Audio is not available for this URL",
        "image": "No images found for this URL",
    }

    def __init__(self, media_type: str):
        self.media_type = media_type
        super().__init__(self.MESSAGES.get(media_type, "This media type is not available for this URL"))


class AllProvidersExhausted(MediaResolverError):
    status_code = 500
    default_message = "Could not fetch media from this URL. Try a different URL."

    def __init__(self, attempts: Optional[List[Tuple[str, str]]] = None):
        # (provider name, failure reason) in the order tried
        self.attempts = list(attempts or [])
        super().__init__()


class ProviderCallFailed(Exception):
    """One provider call failed. Absorbed by the resolver, never surfaced to clients."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class FileFetchFailed(MediaResolverError):
    status_code = 502

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to download file: {reason}")
