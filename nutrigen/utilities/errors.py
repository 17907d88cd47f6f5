"""Error taxonomy for AI-backed operations and the image store."""


class NutriGenError(Exception):
    """Base class for application errors."""


class MissingCredentialError(NutriGenError):
    """No API key configured; raised before any network call is attempted."""


class EmptyResponseError(NutriGenError):
    """The model answered without any usable text."""


class MalformedResponseError(NutriGenError):
    """The model answered, but the payload is not valid JSON of the expected shape."""


class ImageStoreError(NutriGenError):
    """The image store rejected an operation."""


class StoreFullError(ImageStoreError):
    """A write would exceed the store's capacity."""


__all__ = [
    'NutriGenError', 'MissingCredentialError', 'EmptyResponseError',
    'MalformedResponseError', 'ImageStoreError', 'StoreFullError',
]
