"""
The interfaces a modem advertises decide which of the modem scoped objects can be built for it.
"""
from ofono.errors import OfonoError

SERVICE = 'org.ofono'
MANAGER = 'org.ofono.Manager'
MODEM = 'org.ofono.Modem'
VOICE_CALL = 'org.ofono.VoiceCall'
VOICE_CALL_MANAGER = 'org.ofono.VoiceCallManager'
NETWORK_REGISTRATION = 'org.ofono.NetworkRegistration'
NETWORK_OPERATOR = 'org.ofono.NetworkOperator'
HANDSFREE = 'org.ofono.Handsfree'


class CapabilityError(OfonoError):
    """ The object does not advertise the interface needed for the requested operation. """

    def __init__(self, obj, missing_interface):
        super().__init__(obj, missing_interface)
        self.object = obj
        self.missing_interface = missing_interface

    def __str__(self):
        return "%s does not support the %s interface" % (self.object, self.missing_interface)


def check_capability(capabilities, interface, obj=None):
    """ Determines if the interface is in the capability set.
    :param capabilities: the interface names advertised by the object
    :param interface: the interface required
    :param obj: the object the capabilities belong to, for error reporting
    :return: None when the interface is available, otherwise the CapabilityError describing the missing interface.

    >>> check_capability(['org.ofono.Handsfree'], HANDSFREE) is None
    True
    >>> check_capability([], HANDSFREE, '/modem0')
    CapabilityError('/modem0', 'org.ofono.Handsfree')
    """
    if capabilities is not None and interface in capabilities:
        return None
    return CapabilityError(obj, interface)


def require_capability(capabilities, interface, obj=None):
    """ Raises CapabilityError when the interface is not in the capability set. """
    error = check_capability(capabilities, interface, obj)
    if error is not None:
        raise error
