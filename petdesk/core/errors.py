class NotFoundError(LookupError):
    """Raised by services when a referenced record does not exist."""

    def __init__(self, resource, identifier):
        super().__init__("{} {} not found.".format(resource, identifier))
        self.resource = resource
        self.identifier = identifier


__all__ = ["NotFoundError"]
