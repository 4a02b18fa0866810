class RepositoryError(Exception):
    """Base class for failures raised by task and label repositories."""


class NotFound(RepositoryError):
    def __init__(self, id: int):
        self.id = id
        super().__init__(f"NotFound, id is {id}")


class Duplicate(RepositoryError):
    def __init__(self, id: int):
        self.id = id
        super().__init__(f"Duplicate, id is {id}")


class Unexpected(RepositoryError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unexpected Error: [{detail}]")
