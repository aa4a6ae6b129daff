from .media import (
    MEDIA_TYPES,
    HttpMethod,
    MediaRequest,
    MediaResult,
    MediaType,
    ProviderRequest,
    ResolvedMedia,
)
from .payloads import DownloadFileIn, DownloadIn
