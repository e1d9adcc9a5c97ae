"""
An in-memory Connection for tests. Replies are scripted per (path, interface, member), calls and subscriptions are
recorded, and signals are emitted synchronously to the subscribed handlers.
"""
from collections import namedtuple

from ofono.codecs.codecs import WireValue
from ofono.connector.base import Connection, ConnectionClosedError, RemoteFault, SignalMatch, Subscription

Call = namedtuple('Call', ['path', 'interface', 'member', 'signature', 'body'])


def wire(signature, value):
    return WireValue(signature, value)


def b(value):
    return WireValue('b', value)


def s(value):
    return WireValue('s', value)


def u(value):
    return WireValue('u', value)


def y(value):
    return WireValue('y', value)


def q(value):
    return WireValue('q', value)


def as_(*values):
    return WireValue('as', list(values))


class FakeConnection(Connection):

    def __init__(self):
        self.calls = []
        self.subscriptions = []
        self._replies = {}
        self._open = True

    def reply(self, path, interface, member, *values):
        """ scripts the reply to a method. A RemoteFault instance as the value is raised instead. """
        self._replies[(path, interface, member)] = values
        return self

    def fault(self, path, interface, member, error_name='org.ofono.Error.Failed', text=None):
        return self.reply(path, interface, member, RemoteFault(error_name, text, member))

    async def call(self, path, interface, member, signature='', body=()):
        if not self._open:
            raise ConnectionClosedError(member)
        self.calls.append(Call(path, interface, member, signature, tuple(body)))
        values = self._replies.get((path, interface, member), ())
        if len(values) == 1 and isinstance(values[0], RemoteFault):
            raise values[0]
        return list(values)

    def subscribe(self, path, interface, member, handler):
        if not self._open:
            raise ConnectionClosedError(member)
        subscription = Subscription(SignalMatch(path, interface, member), handler, self._unsubscribe)
        self.subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription):
        self.subscriptions.remove(subscription)

    def emit(self, path, interface, member, *args):
        """ delivers a signal to the matching subscriptions. Returns the number of handlers called. """
        match = SignalMatch(path, interface, member)
        targets = [sub for sub in self.subscriptions if sub.match == match]
        for target in targets:
            target.deliver(args)
        return len(targets)

    def subscribed(self, path, interface=None):
        return [sub.match.member for sub in self.subscriptions
                if sub.match.path == path and (interface is None or sub.match.interface == interface)]

    def members_called(self):
        return [c.member for c in self.calls]

    @property
    def open(self):
        return self._open

    def close(self):
        self._open = False


def modem_properties(*interfaces, **overrides):
    """ the property map of a powered, online hardware modem advertising the given interfaces """
    properties = {
        'Online': b(True),
        'Powered': b(True),
        'Lockdown': b(False),
        'Interfaces': as_(*interfaces),
        'Type': s('hardware'),
    }
    properties.update(overrides)
    return properties


def call_properties(state='incoming', **overrides):
    properties = {
        'LineIdentification': s('+15551234'),
        'Name': s(''),
        'Multiparty': b(False),
        'State': s(state),
        'Emergency': b(False),
        'RemoteHeld': b(False),
        'RemoteMultiparty': b(False),
    }
    properties.update(overrides)
    return properties
