"""
Converts the tagged values carried on the bus to python values, and back.

A tagged value is any object with a `signature` and a `value` attribute, such as dbus-fast's Variant or the WireValue
defined here. Untagged python values are also accepted when decoding and are checked by type only.
"""
import logging
from collections import namedtuple
from enum import Enum

from ofono.errors import OfonoError

logger = logging.getLogger(__name__)

WireValue = namedtuple('WireValue', ['signature', 'value'])


class DecodeAnomaly(OfonoError):
    """ A value received from the bus does not fit the expected kind. """

    def __init__(self, reason, value=None, codec=None):
        super().__init__(reason, value, codec)
        self.reason = reason
        self.value = value
        self.codec = codec

    def __str__(self):
        return "%s: %r" % (self.reason, self.value)


def untag(wire):
    """ splits a wire value into its signature and value. The signature is None for untagged values.
    >>> untag(WireValue('b', True))
    ('b', True)
    >>> untag(42)
    (None, 42)
    """
    if hasattr(wire, 'signature') and hasattr(wire, 'value'):
        return wire.signature, wire.value
    return None, wire


class Codec:
    """ Decodes one kind of value from the bus, and encodes it for writing. """

    kind = None
    signature = None
    accepted_signatures = ()

    def decode(self, wire):
        signature, value = untag(wire)
        if signature is not None and signature != self.signature and signature not in self.accepted_signatures:
            raise DecodeAnomaly("expected %s but signature is '%s'" % (self.kind, signature), value, self)
        return self._decode(value)

    def encode(self, value) -> WireValue:
        return WireValue(self.signature, self._encode(value))

    def _decode(self, value):
        raise NotImplementedError

    def _encode(self, value):
        raise NotImplementedError

    def _check_type(self, value, types):
        if not isinstance(value, types):
            raise DecodeAnomaly("expected %s but got %s" % (self.kind, type(value).__name__), value, self)
        return value

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, self.signature)


class BooleanCodec(Codec):
    kind = 'boolean'
    signature = 'b'

    def _decode(self, value):
        return self._check_type(value, bool)

    def _encode(self, value):
        if not isinstance(value, bool):
            raise ValueError("not a boolean: %r" % (value,))
        return value


integer_ranges = {
    'y': (0, 0xFF),
    'n': (-0x8000, 0x7FFF),
    'q': (0, 0xFFFF),
    'i': (-0x80000000, 0x7FFFFFFF),
    'u': (0, 0xFFFFFFFF),
    'x': (-0x8000000000000000, 0x7FFFFFFFFFFFFFFF),
    't': (0, 0xFFFFFFFFFFFFFFFF),
}


class IntegerCodec(Codec):
    """ Any of the integer types. Decoding accepts every integer signature, since the width is not part of the
        modeled value. Encoding range-checks against this codec's signature. """
    kind = 'integer'
    accepted_signatures = tuple(integer_ranges.keys())

    def __init__(self, signature='u'):
        if signature not in integer_ranges:
            raise ValueError("not an integer signature: '%s'" % signature)
        self.signature = signature

    def _decode(self, value):
        if isinstance(value, bool):
            raise DecodeAnomaly("expected integer but got bool", value, self)
        return self._check_type(value, int)

    def _encode(self, value):
        low, high = integer_ranges[self.signature]
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise ValueError("%r is not in the range of '%s'" % (value, self.signature))
        return value


class StringCodec(Codec):
    kind = 'string'
    signature = 's'
    accepted_signatures = ('o', 'g')

    def _decode(self, value):
        return self._check_type(value, str)

    def _encode(self, value):
        if not isinstance(value, str):
            raise ValueError("not a string: %r" % (value,))
        return value


class StringListCodec(Codec):
    kind = 'string-sequence'
    signature = 'as'
    accepted_signatures = ('ao',)

    def _decode(self, value):
        self._check_type(value, (list, tuple))
        for item in value:
            self._check_type(item, str)
        return list(value)

    def _encode(self, value):
        if isinstance(value, str) or any(not isinstance(v, str) for v in value):
            raise ValueError("not a sequence of strings: %r" % (value,))
        return list(value)


class EnumCodec(Codec):
    """ A string restricted to the values of an Enum. """
    kind = 'enumerated-string'
    signature = 's'

    def __init__(self, enum_type):
        self.enum_type = enum_type

    def _decode(self, value):
        self._check_type(value, str)
        try:
            return self.enum_type(value)
        except ValueError:
            raise DecodeAnomaly("'%s' is not a %s" % (value, self.enum_type.__name__), value, self) from None

    def _encode(self, value):
        if not isinstance(value, Enum):
            value = self.enum_type(value)
        elif not isinstance(value, self.enum_type):
            raise ValueError("not a %s: %r" % (self.enum_type.__name__, value))
        return value.value

    def __repr__(self):
        return "EnumCodec(%s)" % self.enum_type.__name__


class FlagSetCodec(Codec):
    """ A list of strings folded into a flag set type (see types.flag_set). Strings that are not a known flag are
        dropped, since the service may advertise flags newer than this library. """
    kind = 'flag-set'
    signature = 'as'

    def __init__(self, flags_type):
        self.flags_type = flags_type

    def _decode(self, value):
        strings = StringListCodec()._decode(value)
        unknown = set(strings).difference(self.flags_type.wire_names)
        if unknown:
            logger.debug("ignoring unknown %s: %s", self.flags_type.__name__, ', '.join(sorted(unknown)))
        return self.flags_type.from_wire(strings)

    def _encode(self, value):
        if isinstance(value, self.flags_type):
            return value.to_wire()
        return StringListCodec()._encode(value)

    def __repr__(self):
        return "FlagSetCodec(%s)" % self.flags_type.__name__


codecs_by_kind = {
    'boolean': BooleanCodec(),
    'integer': IntegerCodec('i'),
    'string': StringCodec(),
    'string-sequence': StringListCodec(),
}


def lookup(kind):
    """ resolves a kind to a codec. A kind is either a codec, an Enum type, or a kind name. """
    if isinstance(kind, Codec):
        return kind
    if isinstance(kind, type) and issubclass(kind, Enum):
        return EnumCodec(kind)
    try:
        return codecs_by_kind[kind]
    except KeyError:
        raise ValueError("unknown kind %r" % (kind,)) from None


def decode(wire, kind):
    return lookup(kind).decode(wire)


def encode(value, kind) -> WireValue:
    return lookup(kind).encode(value)
