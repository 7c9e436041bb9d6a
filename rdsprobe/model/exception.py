import os
from typing import Optional


class BusinessException(Exception):
    """Thrown if a business error requires the program execution to abort"""
    pass


class ConfigurationException(BusinessException):
    """Thrown if a configuration error is encountered"""
    pass


class AddressParseError(ConfigurationException):
    """Thrown if a textual address can neither be parsed nor resolved"""

    def __init__(self, text: str, reason: str = None):
        self.text = text
        self.reason = reason
        message = f'Cannot parse address <{text}>'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class FamilyMismatchError(ConfigurationException):
    """Thrown if source and destination address are of different families"""
    pass


class GroupSizeError(ConfigurationException):
    """Thrown if the requested number of sockets is out of bounds"""
    pass


class TosRangeError(ConfigurationException):
    """Thrown if the requested type of service does not fit a single byte"""
    pass


class OsErrorMixin:
    """Keeps errno and its description of the error that caused an exception, 0 if it had none"""

    def _init_os_error(self, cause: Optional[Exception]):
        self.errno = getattr(cause, 'errno', None) or 0
        self.strerror = os.strerror(self.errno) if self.errno else 'unknown error'

    def _os_suffix(self) -> str:
        return f', errno: {self.errno} ({self.strerror})'


class SocketSetupError(OsErrorMixin, BusinessException):
    """Thrown if an RDS socket could not be made ready for sending, fatal for the whole run"""

    def __init__(self, message: str, cause: Exception = None):
        self._init_os_error(cause)
        self.message = message
        super().__init__(message + self._os_suffix())


class SocketCreateError(SocketSetupError):
    pass


class RouteProbeError(SocketSetupError):
    pass


class BindError(SocketSetupError):
    pass


class TosSetError(SocketSetupError):
    pass


class SendError(OsErrorMixin, BusinessException):
    """Thrown if sending a probe failed, aborts the remaining sockets of a run"""

    def __init__(self, slot: int, sent: int, cause: Exception = None):
        self._init_os_error(cause)
        self.slot = slot
        self.sent = sent
        super().__init__(f'Send failed on socket {slot} after {sent} packets' + self._os_suffix())


class QueueQueryError(OsErrorMixin, Exception):
    """Outbound queue length could not be queried, only reported as part of a spin result"""

    def __init__(self, cause: OSError = None):
        self._init_os_error(cause)
        super().__init__('Outbound queue query failed' + self._os_suffix())
