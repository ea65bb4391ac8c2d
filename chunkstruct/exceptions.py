class ChunkstructException(Exception):
    '''Base class to extend in order to throw exception in chunkstruct.

    The "chain" represents the layers that the exception crossed on its way
    up, innermost first: every chunk that sees it passing appends the name of
    the field that failed, without wrapping it.
    '''

    def __init__(self, chain=None):
        self.chain = chain if chain is not None else []
        super().__init__()

    @property
    def path(self):
        return '.'.join(str(_) for _ in self.chain[::-1])

    def describe(self):
        return self.__class__.__name__

    def __str__(self):
        msg = self.describe()
        if self.chain:
            msg = f'{msg} (at {self.path})'

        return msg


class UnpackException(ChunkstructException):
    '''The stream ended before the field could be read entirely.'''
    pass


class BadSignatureException(ChunkstructException):

    def __init__(self, received=None, chain=None):
        self.received = received
        super().__init__(chain=chain)

    def describe(self):
        return f'bad signature (received {self.received!r})'


class InvalidByteException(ChunkstructException):

    def __init__(self, byte, chain=None):
        self.byte = byte
        super().__init__(chain=chain)

    def describe(self):
        return f'invalid byte {self.byte!r} in chunk type'


class InvalidIdentifierException(ChunkstructException):

    def __init__(self, received, chain=None):
        self.received = received
        super().__init__(chain=chain)

    def describe(self):
        return f'bad chunk type, reserved bit set (received {self.received!r})'


class BadChecksumException(ChunkstructException):

    def __init__(self, received, expected, chain=None):
        self.received = received
        self.expected = expected
        super().__init__(chain=chain)

    def describe(self):
        return f'bad CRC (received {self.received:08x}, expected {self.expected:08x})'


class LengthMismatchException(ChunkstructException):

    def __init__(self, declared, actual, chain=None):
        self.declared = declared
        self.actual = actual
        super().__init__(chain=chain)

    def describe(self):
        return f'length mismatch (declared {self.declared}, actual {self.actual})'


class NotFoundException(ChunkstructException):

    def __init__(self, name, chain=None):
        self.name = name
        super().__init__(chain=chain)

    def describe(self):
        return f'no chunk with type {self.name!r}'


class InvalidEncodingException(ChunkstructException):

    def __init__(self, reason, chain=None):
        self.reason = reason
        super().__init__(chain=chain)

    def describe(self):
        return f'data is not valid UTF-8: {self.reason}'
