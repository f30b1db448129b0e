class ProviderError(Exception):
    """Base class for requests the provider refuses to resolve."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class UnsupportedMetadataType(ProviderError):
    def __init__(self, metadata_type):
        self.metadata_type = metadata_type
        super().__init__(f"Unsupported metadata type: {metadata_type}")


class InvalidMatchRequest(ProviderError):
    pass


class InvalidRatingKey(ProviderError):
    def __init__(self, rating_key: str):
        self.rating_key = rating_key
        super().__init__(f"Invalid ratingKey: {rating_key}")
