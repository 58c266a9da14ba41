from .storage import UploadStorage, MAX_IMAGE_SIZE

__all__ = ['UploadStorage', 'MAX_IMAGE_SIZE']
