class CaptionError(Exception):
    """ Base class for caption errors """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class CaptionFormatError(CaptionError):
    """ Raised when a caption format tag or extension is not recognised """
    pass

class CaptionLoadError(CaptionError):
    """
    Raised (or captured) when caption data cannot be retrieved from its source
    """
    def __init__(self, message : str|None = None, error : Exception|None = None, status : int|None = None, reason : str|None = None):
        super().__init__(message, error)
        self.status = status
        self.reason = reason

    def __str__(self) -> str:
        if self.message:
            return self.message
        return super().__str__()
