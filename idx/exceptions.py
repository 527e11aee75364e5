class IdxException(Exception):
    pass


class IndexAlreadyExists(IdxException):
    pass


class UnknownIndex(IdxException):
    pass


class KeyNotFound(IdxException, KeyError):
    pass


class UnsupportedIndexOperation(IdxException):
    pass


class CollectorHalted(IdxException):
    pass
