from .acceptor import UploadAcceptor, generate_storage_filename, get_upload_acceptor, upload_boundary
from .routes_uploads import router
from .storage import LocalDiskStorage, StorageSink

__all__ = [
    'UploadAcceptor',
    'generate_storage_filename',
    'get_upload_acceptor',
    'upload_boundary',
    'router',
    'LocalDiskStorage',
    'StorageSink',
]
