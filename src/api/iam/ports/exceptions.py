"""Domain exceptions for IAM bounded context.

These exceptions represent errors raised by IAM ports. They should be
caught and handled by the application or presentation layer.
"""


class UserDirectoryError(Exception):
    """Raised when the user directory cannot be queried.

    Access denial is never signalled with this exception; it means the
    membership lookup itself failed and no decision could be made.
    """

    pass
