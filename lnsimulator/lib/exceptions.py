class InputValidationError(ValueError):
    pass


class InvalidNode(InputValidationError):
    pass


class InvalidAmount(InputValidationError):
    pass


class InvalidNetworkParameters(InputValidationError):
    pass


class InvalidChannel(InputValidationError):
    pass


class SameSenderReceiver(InputValidationError):
    pass


class NoRoute(Exception):
    pass
