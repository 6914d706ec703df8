class D2StructException(Exception):
    '''Base class to extend in order to throw exception in d2struct.

    It takes as first argument the chain of the fields that caused the
    exception, the outermost last.
    '''

    def __init__(self, chain=None, message=None):
        self.chain = chain if chain is not None else []
        self.message = message
        args = (message,) if message else ()
        super().__init__(*args)

    def __str__(self):
        where = '.'.join(reversed(self.chain))
        if where and self.message:
            return f'{where}: {self.message}'

        return where or self.message or ''


class FormatException(D2StructException):
    '''The data doesn't look like a save file we understand.'''
    pass


class UnpackException(FormatException):
    pass


class MagicException(FormatException):
    pass


class ChunkUnpackException(FormatException):
    pass


class SectionNotFoundException(FormatException):
    pass


class UnrecoverableException(FormatException):
    '''This is useful when is not possible to let an unknown value
    slip through the parsing.'''
    pass


class ContractException(D2StructException, ValueError):
    '''The caller asked for something the format cannot represent.'''
    pass
