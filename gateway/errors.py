class InvalidRenderRequest(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class MissingRequiredField(InvalidRenderRequest):
    pass


class OutOfRangeValue(InvalidRenderRequest):
    pass


class RenderEngineError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
