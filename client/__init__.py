from .downloader import MediaDownloader, ResolveFailed, ResolverClient
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStoragePort
from .store import ClientStore, HistoryEntry
