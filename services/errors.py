class LoadingError(Exception):
    """An upstream fetch failed: network error, bad status or unusable payload."""

    def __init__(self, message: str, url: str = ''):
        super().__init__(message)
        self.url = url
