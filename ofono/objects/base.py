"""
Local mirrors of the objects exported by the ofono service.

A mirror holds a snapshot of the remote object's properties. It is built from a property map, either one that was
already retrieved by a listing call (from_known_data) or one fetched with GetProperties (from_path). Afterwards the
mirror follows the remote object through its PropertyChanged signal, and republishes each change on its own events.

Property writes are optimistic: the snapshot is updated before the write is sent, and a later PropertyChanged from
the service always wins.
"""
import inspect
import logging
from collections import namedtuple

from ofono.codecs.codecs import DecodeAnomaly
from ofono.connector.base import RemoteFault
from ofono.errors import OfonoError
from ofono.objects.capabilities import require_capability
from ofono.support.events import Events

logger = logging.getLogger(__name__)

UNKNOWN_PROPERTY = 'unknown-property'
DECODE_ANOMALY = 'decode-anomaly'
MALFORMED_SIGNAL = 'malformed-signal'
SUBSCRIBE_FAILED = 'subscribe-failed'


class PropertyNotWritableError(OfonoError):

    def __init__(self, obj, name):
        super().__init__(obj, name)
        self.object = obj
        self.name = name

    def __str__(self):
        return "property '%s' of %r is read-only" % (self.name, self.object)


class ObjectEvent:

    def __init__(self, source, data=None):
        self.source = source
        self.data = data


class PropertyChangedEvent(ObjectEvent):

    def __init__(self, source, name, before, after):
        super().__init__(source, (before, after))
        self.name = name

    @property
    def before(self):
        return self.data[0]

    @property
    def after(self):
        return self.data[1]

    def __repr__(self):
        return "PropertyChangedEvent(%r, %s: %r -> %r)" % (self.source, self.name, self.before, self.after)


class ObjectAddedEvent(ObjectEvent):
    """ data is the mirror of the added object """

    @property
    def object(self):
        return self.data


class ObjectRemovedEvent(ObjectEvent):
    """ data is the path of the removed object """

    @property
    def path(self):
        return self.data


class SignalEvent(ObjectEvent):
    """ An object specific signal, forwarded as is. data is the tuple of signal arguments. """

    def __init__(self, source, member, args):
        super().__init__(source, tuple(args))
        self.member = member


Diagnostic = namedtuple('Diagnostic', ['kind', 'name', 'value', 'reason'])


class DiagnosticEvent(ObjectEvent):
    """ Reports input that was ignored: an unmodeled property or signal, or a value that could not be decoded. """

    @property
    def kind(self):
        return self.data.kind

    @property
    def name(self):
        return self.data.name

    def __repr__(self):
        return "DiagnosticEvent(%r, %r)" % (self.source, self.data)


class Property:
    """ Declares a property of a mirror. The descriptor reads the current value from the mirror's snapshot.
        Absent optional properties read as None. """

    def __init__(self, wire_name, codec, optional=False, writable=False):
        self.wire_name = wire_name
        self.codec = codec
        self.optional = optional
        self.writable = writable
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, owner=None):
        if obj is None:
            return self
        return obj.snapshot.get(self.name)

    def __set__(self, obj, value):
        raise AttributeError("'%s' is a mirrored property; use set_property()" % self.name)

    def __repr__(self):
        return "Property(%s, %r)" % (self.wire_name, self.codec)


def _copy(value):
    return list(value) if isinstance(value, list) else value


class Snapshot:
    """ The decoded property values of a mirror. Only properties in the schema can be stored.
        Lists are copied on the way in and out, so a caller cannot change the snapshot behind the mirror's back. """

    def __init__(self, schema):
        self._schema = schema
        self._values = {}

    @property
    def schema(self):
        return self._schema

    def get(self, name, default=None):
        return _copy(self._values.get(name, default))

    def set(self, name, value):
        if name not in self._schema:
            raise KeyError(name)
        self._values[name] = _copy(value)

    def __contains__(self, name):
        return name in self._values

    def __len__(self):
        return len(self._values)

    def as_dict(self):
        return dict((name, _copy(value)) for name, value in self._values.items())

    def __repr__(self):
        return "Snapshot(%r)" % self._values


class RemoteObject:
    """ An object on the bus, identified by its path and reached through a connection.

    Subclasses list the signals they follow in `signals`, a mapping of signal name to handler method name.
    The subscriptions are made by _listen() and released by close().
    """
    interface = None
    event_kinds = ('diagnostic',)
    signals = {}

    def __init__(self, path, connection):
        if connection is None:
            raise ValueError("a connection is required")
        self._path = path
        self._connection = connection
        self._subscriptions = []
        self.events = Events(*self.event_kinds)

    @property
    def path(self):
        return self._path

    @property
    def connection(self):
        return self._connection

    @property
    def live(self):
        return bool(self._subscriptions)

    def _listen(self):
        try:
            for member, handler_name in self.signals.items():
                handler = self._signal_handler(member, getattr(self, handler_name))
                self._subscriptions.append(self._connection.subscribe(self.path, self.interface, member, handler))
        except Exception:
            self.close()
            raise

    def _signal_handler(self, member, fn):
        signature = inspect.signature(fn)

        def handle(*args):
            try:
                signature.bind(*args)
            except TypeError as e:
                self._diagnose(MALFORMED_SIGNAL, member, args, str(e))
                return
            try:
                fn(*args)
            except (TypeError, AttributeError) as e:
                # arguments of the wrong shape, such as a property map that is not a mapping
                self._diagnose(MALFORMED_SIGNAL, member, args, str(e))
        return handle

    def close(self):
        """ Stops following the remote object. The last known state remains readable. """
        subscriptions, self._subscriptions = self._subscriptions, []
        for s in subscriptions:
            s.cancel()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()

    async def _call(self, member, signature='', body=()):
        return await self._connection.call(self.path, self.interface, member, signature, body)

    def _diagnose(self, kind, name, value=None, reason=None):
        logger.warning("%r: %s %s%s", self, kind, name, ": %s" % reason if reason else '')
        self.events.diagnostic.fire(DiagnosticEvent(self, Diagnostic(kind, name, value, reason)))

    def _forward(self, kind, member, *args):
        getattr(self.events, kind).fire(SignalEvent(self, member, args))

    def _child_added(self, mirror_type, member, path, properties):
        """ builds the mirror of an added child object and publishes it on events.added. The child is not kept. """
        try:
            child = mirror_type.from_known_data(path, properties, self.connection)
        except DecodeAnomaly as e:
            self._diagnose(DECODE_ANOMALY, member, path, str(e))
            return None
        except RemoteFault as e:
            self._diagnose(SUBSCRIBE_FAILED, member, path, str(e))
            return None
        self.events.added.fire(ObjectAddedEvent(self, child))
        return child

    def _child_removed(self, path):
        self.events.removed.fire(ObjectRemovedEvent(self, path))

    def __repr__(self):
        return "%s('%s')" % (self.__class__.__name__, self.path)


class Mirror(RemoteObject):
    """ A remote object whose properties are mirrored locally. """
    event_kinds = ('change', 'diagnostic')
    signals = {'PropertyChanged': '_property_changed'}

    def __init__(self, path, connection):
        super().__init__(path, connection)
        self.snapshot = Snapshot(self.properties())

    @classmethod
    def properties(cls):
        """ The declared properties of this mirror class, keyed by attribute name. """
        schema = cls.__dict__.get('_schema')
        if schema is None:
            schema = {}
            for klass in reversed(cls.__mro__):
                for name, value in vars(klass).items():
                    if isinstance(value, Property):
                        schema[name] = value
            cls._schema = schema
        return schema

    @classmethod
    def property_for_wire_name(cls, wire_name):
        for p in cls.properties().values():
            if p.wire_name == wire_name:
                return p
        return None

    @classmethod
    def from_known_data(cls, path, properties, connection):
        """ Builds a live mirror from a property map that was already retrieved, without calling the service.
        :raises DecodeAnomaly: when a mandatory property is missing or cannot be decoded
        """
        mirror = cls(path, connection)
        mirror._populate(properties)
        mirror._listen()
        return mirror

    @classmethod
    def from_listing(cls, entries, connection):
        """ Builds a live mirror for each (path, properties) entry of a listing reply, such as GetModems.
            Every entry is decoded before any mirror subscribes, so when one entry fails no mirror is left live.
        :raises DecodeAnomaly: when an entry is missing a mandatory property or one cannot be decoded
        """
        mirrors = []
        try:
            for path, properties in entries:
                mirror = cls(path, connection)
                mirror._populate(properties)
                mirrors.append(mirror)
            for mirror in mirrors:
                mirror._listen()
        except Exception:
            for mirror in mirrors:
                mirror.close()
            raise
        return mirrors

    @classmethod
    async def from_path(cls, path, connection):
        """ Fetches the properties of the object at path, then follows its changes.
        :raises RemoteFault: when the properties cannot be fetched or the subscription fails
        """
        mirror = cls(path, connection)
        await mirror._fetch()
        mirror._listen()
        return mirror

    async def _fetch(self):
        reply = await self._call('GetProperties')
        self._populate(reply[0])

    def _populate(self, properties):
        for wire_name, wire in properties.items():
            prop = self.property_for_wire_name(wire_name)
            if prop is None:
                self._diagnose(UNKNOWN_PROPERTY, wire_name, wire)
                continue
            try:
                self.snapshot.set(prop.name, prop.codec.decode(wire))
            except DecodeAnomaly as e:
                if not prop.optional:
                    raise DecodeAnomaly("%s of %r: %s" % (wire_name, self, e.reason), e.value, e.codec) from e
                self._diagnose(DECODE_ANOMALY, wire_name, e.value, e.reason)
        missing = [p.wire_name for p in self.properties().values() if not p.optional and p.name not in self.snapshot]
        if missing:
            raise DecodeAnomaly("%r is missing mandatory properties" % self, missing)

    async def refresh(self):
        """ Re-fetches every property. Values that differ from the snapshot are applied as changes. """
        reply = await self._call('GetProperties')
        for wire_name, wire in reply[0].items():
            self._apply(wire_name, wire, only_if_changed=True)

    async def set_property(self, name, value):
        """ Writes a property to the remote object. The snapshot is updated before the write is sent.
        :param name: the attribute name, or the wire name of the property
        :raises PropertyNotWritableError: when the property cannot be written
        :raises ValueError: when the value cannot be encoded for the property
        :raises RemoteFault: when the service rejects the write
        """
        prop = self.properties().get(name) or self.property_for_wire_name(name)
        if prop is None:
            raise AttributeError("%r has no property '%s'" % (self, name))
        if not prop.writable:
            raise PropertyNotWritableError(self, prop.name)
        wire = prop.codec.encode(value)
        self.snapshot.set(prop.name, prop.codec.decode(wire))
        await self._call('SetProperty', 'sv', (prop.wire_name, wire))

    def _property_changed(self, name, value):
        self._apply(name, value)

    def _apply(self, wire_name, wire, only_if_changed=False):
        prop = self.property_for_wire_name(wire_name)
        if prop is None:
            self._diagnose(UNKNOWN_PROPERTY, wire_name, wire)
            return
        try:
            value = prop.codec.decode(wire)
        except DecodeAnomaly as e:
            self._diagnose(DECODE_ANOMALY, wire_name, e.value, e.reason)
            return
        before = self.snapshot.get(prop.name)
        if only_if_changed and prop.name in self.snapshot and before == value:
            return
        self.snapshot.set(prop.name, value)
        self.events.change.fire(PropertyChangedEvent(self, prop.name, before, self.snapshot.get(prop.name)))

    @classmethod
    async def of_modem(cls, modem, connection):
        """ Builds the mirror of this interface on the given modem.
        :raises CapabilityError: when the modem does not advertise the interface. No call is made in that case.
        """
        require_capability(modem.interfaces, cls.interface, modem.path)
        return await cls.from_path(modem.path, connection)
