"""
A Connection over D-Bus, using dbus-fast's asyncio message bus.
"""
import asyncio
import logging
import sys
from collections import defaultdict

from dbus_fast import BusType, Message, MessageType, Variant
from dbus_fast.aio import MessageBus

from ofono.config.config import configure_module
from ofono.connector.base import Connection, ConnectionClosedError, RemoteFault, SignalMatch, Subscription

logger = logging.getLogger(__name__)

service = 'org.ofono'
bus = 'system'
timeout = 25

configure_module(sys.modules[__name__])

bus_types = {
    'system': BusType.SYSTEM,
    'session': BusType.SESSION,
}

DBUS_NAME = 'org.freedesktop.DBus'
DBUS_PATH = '/org/freedesktop/DBus'
TIMEOUT_ERROR = 'org.freedesktop.DBus.Error.Timeout'
FAILED_ERROR = 'org.freedesktop.DBus.Error.Failed'


def to_variant(arg):
    """ converts local wire values to dbus-fast variants, recursing into containers. """
    if hasattr(arg, 'signature') and hasattr(arg, 'value') and not isinstance(arg, Variant):
        return Variant(arg.signature, to_variant(arg.value))
    if isinstance(arg, (list, tuple)):
        return type(arg)(to_variant(a) for a in arg)
    if isinstance(arg, dict):
        return dict((k, to_variant(v)) for k, v in arg.items())
    return arg


def match_rule(sender, match: SignalMatch):
    """
    >>> match_rule('org.ofono', SignalMatch('/modem0', 'org.ofono.Modem', 'PropertyChanged'))
    "type='signal',sender='org.ofono',path='/modem0',interface='org.ofono.Modem',member='PropertyChanged'"
    """
    return "type='signal',sender='%s',path='%s',interface='%s',member='%s'" % \
           (sender, match.path, match.interface, match.member)


class DBusConnection(Connection):
    """ Issues method calls to the ofono service and routes its signals to subscriptions.

        Signals are dispatched from the bus reader in arrival order. A match rule is installed on the bus for each
        distinct (path, interface, member) with at least one active subscription.
    """

    def __init__(self, message_bus: MessageBus, service_name=None, call_timeout=None, owns_bus=False):
        self._bus = message_bus
        self.service = service_name or service
        self.timeout = call_timeout if call_timeout is not None else timeout
        self._owns_bus = owns_bus
        self._loop = asyncio.get_running_loop()
        self._subscriptions = defaultdict(list)
        self._pending = set()
        self._closed = False
        self._bus.add_message_handler(self._dispatch)

    @classmethod
    async def connect(cls, bus_type=None, service_name=None, call_timeout=None):
        """ connects to the configured bus. The returned connection owns the bus and disconnects it on close.
        :param bus_type: a BusType, or one of the names 'system' and 'session'. Defaults to the configured bus.
        """
        if not isinstance(bus_type, BusType):
            bus_type = bus_types[bus_type or bus]
        message_bus = await MessageBus(bus_type=bus_type).connect()
        logger.debug("connected to %s bus", bus_type)
        return cls(message_bus, service_name, call_timeout, owns_bus=True)

    @property
    def open(self):
        return not self._closed and self._bus.connected

    async def call(self, path, interface, member, signature='', body=()):
        if not self.open:
            raise ConnectionClosedError(member)
        message = Message(destination=self.service, path=path, interface=interface, member=member,
                          signature=signature, body=[to_variant(a) for a in body])
        try:
            if self.timeout:
                reply = await asyncio.wait_for(self._bus.call(message), self.timeout)
            else:
                reply = await self._bus.call(message)
        except asyncio.TimeoutError as e:
            raise RemoteFault(TIMEOUT_ERROR, "no reply within %ss" % self.timeout, member) from e
        except (EOFError, OSError) as e:
            raise ConnectionClosedError(member) from e
        if reply is None:
            raise RemoteFault(FAILED_ERROR, 'no reply', member)
        if reply.message_type == MessageType.ERROR:
            text = reply.body[0] if reply.body and isinstance(reply.body[0], str) else None
            raise RemoteFault(reply.error_name, text, member)
        return list(reply.body)

    def subscribe(self, path, interface, member, handler):
        if not self.open:
            raise ConnectionClosedError(member)
        match = SignalMatch(path, interface, member)
        subscription = Subscription(match, handler, self._unsubscribe)
        first = not self._subscriptions[match]
        self._subscriptions[match].append(subscription)
        if first:
            self._bus_match('AddMatch', match)
        logger.debug("subscribed %r", subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription):
        match = subscription.match
        subscriptions = self._subscriptions.get(match)
        if not subscriptions:
            return
        subscriptions.remove(subscription)
        if not subscriptions:
            del self._subscriptions[match]
            if self.open:
                self._bus_match('RemoveMatch', match)
        logger.debug("unsubscribed %r", subscription)

    def _bus_match(self, member, match):
        message = Message(destination=DBUS_NAME, path=DBUS_PATH, interface=DBUS_NAME, member=member,
                          signature='s', body=[match_rule(self.service, match)])
        task = self._loop.create_task(self._bus.call(message))
        self._pending.add(task)
        task.add_done_callback(lambda t: self._bus_match_done(t, member, match))

    def _bus_match_done(self, task, member, match):
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        reply = None if error else task.result()
        if error is not None or (reply is not None and reply.message_type == MessageType.ERROR):
            logger.warning("%s failed for %s.%s on %s: %s", member, match.interface, match.member, match.path,
                           error or reply.error_name)

    def _dispatch(self, message: Message):
        if message.message_type != MessageType.SIGNAL:
            return None
        subscriptions = self._subscriptions.get(SignalMatch(message.path, message.interface, message.member))
        if subscriptions:
            for s in list(subscriptions):
                try:
                    s.deliver(message.body)
                except Exception as e:
                    logger.exception("signal handler for %s.%s failed: %s", message.interface, message.member, e)
        return None

    def close(self):
        if self._closed:
            return
        # a bus that is about to be disconnected drops its match rules by itself
        self._closed = self._owns_bus
        for subscriptions in list(self._subscriptions.values()):
            for s in list(subscriptions):
                s.cancel()
        self._closed = True
        self._bus.remove_message_handler(self._dispatch)
        if self._owns_bus:
            self._bus.disconnect()
