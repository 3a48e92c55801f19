'''Errors emitted while building or executing API requests.'''


class APIError(Exception):
    '''Base class for every error this package reports.'''


class TransportError(APIError):
    '''Wraps a failure reported by the transport during network I/O.'''

    def __init__(self, error: BaseException) -> None:
        super().__init__(f'{type(error).__name__}: {error}')
        self.error = error
        self.__cause__ = error


class InvalidJSONError(APIError):
    '''The data provided to be parsed is not valid JSON.'''


class FailedJSONConversionError(APIError):
    '''Parameters could not be converted to or from JSON.'''


class NoDataError(APIError):
    '''No data was received from the server.'''


class URLCreationError(APIError):
    '''A URL could not be created from the endpoint's fields.'''
