"""
The RPC substrate the mirrors are built on. A connection can call a method on a remote object and can deliver
the signals emitted by a remote object to a local handler. How messages are framed and routed is left to the
implementation (see dbusconn.)
"""
from abc import abstractmethod
from collections import namedtuple

from ofono.errors import OfonoError


class RemoteFault(OfonoError):
    """ The remote side, or the transport, failed a method call. """

    def __init__(self, error_name, text=None, member=None):
        super().__init__(error_name, text, member)
        self.error_name = error_name
        self.text = text
        self.member = member

    def __str__(self):
        s = self.error_name
        if self.member:
            s = "%s: %s" % (self.member, s)
        return s if not self.text else "%s (%s)" % (s, self.text)


class ConnectionClosedError(RemoteFault):
    """ Indicates the connection was closed when a call or subscription was attempted. """

    def __init__(self, member=None):
        super().__init__('org.freedesktop.DBus.Error.Disconnected', 'connection closed', member)


SignalMatch = namedtuple('SignalMatch', ['path', 'interface', 'member'])


class Subscription:
    """ A registered signal handler. Cancelling a subscription stops delivery to the handler. """

    def __init__(self, match: SignalMatch, handler, on_cancel=None):
        self.match = match
        self.handler = handler
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self):
        return self._active

    def deliver(self, args):
        if self._active:
            self.handler(*args)

    def cancel(self):
        if not self._active:
            return
        self._active = False
        if self._on_cancel is not None:
            self._on_cancel(self)

    def __repr__(self):
        return "Subscription(%s %s.%s)" % self.match


class Connection:
    """
    A connection to the bus hosting the ofono service. A single connection is shared by every mirror; mirrors
    only call methods and register signal handlers through it and never reconfigure it.
    """

    @abstractmethod
    async def call(self, path, interface, member, signature='', body=()) -> list:
        """ Calls a method on a remote object.
        :param path: the object path of the remote object
        :param interface: the interface the method belongs to
        :param member: the method name
        :param signature: the wire signature of the arguments in body
        :param body: the arguments. Values of variant type are given as WireValue instances.
        :return: the reply arguments as a list
        :raises RemoteFault: when the remote object replies with an error, or the call cannot be completed.
        """
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, path, interface, member, handler) -> Subscription:
        """ Registers a handler for a signal emitted by a remote object. Signals for one object are passed to the
            handler in the order they were emitted, one at a time.
        :param handler: called with the signal arguments.
        :return: the Subscription. Cancel it to stop delivery.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def open(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def close(self):
        raise NotImplementedError
