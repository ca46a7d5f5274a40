class ServiceError(Exception):
    pass


class GeminiConfigurationError(ServiceError):
    pass


class GenerationError(ServiceError):
    pass


class RateLimitedError(GenerationError):
    pass


class VideoLookupError(ServiceError):
    pass


class ImageLookupError(ServiceError):
    pass


class OfflineError(ServiceError):
    def __init__(self, message: str = "You are offline. Please check your internet connection or view saved recipes."):
        super().__init__(message)
