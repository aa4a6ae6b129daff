from .download import router as download_router
from .files import router as files_router
