from enum import Flag


class Compliant(Flag):
    '''How strictly a save file must follow the format.

    With NONE an unexpected magic or an unknown enumerated value is only
    logged; the corresponding flag turns it into an exception. INHERIT
    makes a field defer to its father.'''
    NONE  = 0
    ENUM  = 1 << 0
    MAGIC = 1 << 1
    INHERIT = 1 << 2
    STRICT = ENUM | MAGIC
