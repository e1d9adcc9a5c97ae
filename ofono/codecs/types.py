"""
The enumerated and flag types that property values are decoded into.
"""
from collections import namedtuple
from enum import Enum


class VoiceCallState(Enum):
    active = 'active'
    held = 'held'
    dialing = 'dialing'
    alerting = 'alerting'
    incoming = 'incoming'
    waiting = 'waiting'
    disconnected = 'disconnected'


class NetworkRegistrationMode(Enum):
    auto = 'auto'
    auto_only = 'auto-only'
    manual = 'manual'


class NetworkRegistrationStatus(Enum):
    unregistered = 'unregistered'
    registered = 'registered'
    searching = 'searching'
    denied = 'denied'
    unknown = 'unknown'
    roaming = 'roaming'


class NetworkTechnology(Enum):
    gsm = 'gsm'
    edge = 'edge'
    umts = 'umts'
    hspa = 'hspa'
    lte = 'lte'


class OperatorStatus(Enum):
    unknown = 'unknown'
    available = 'available'
    current = 'current'
    forbidden = 'forbidden'


class HideCallerId(Enum):
    """ The caller id presentation requested when dialing. """
    default = 'default'
    enabled = 'enabled'
    disabled = 'disabled'

    @classmethod
    def from_flag(cls, hide):
        """
        >>> HideCallerId.from_flag(None), HideCallerId.from_flag(True), HideCallerId.from_flag(False)
        (<HideCallerId.default: 'default'>, <HideCallerId.enabled: 'enabled'>, <HideCallerId.disabled: 'disabled'>)
        """
        if hide is None:
            return cls.default
        return cls.enabled if hide else cls.disabled


def flag_set(typename, flags):
    """ Builds a namedtuple type with one boolean field per flag. flags maps the field name to the wire string.
        The wire names are kept on the type as `wire_names`, in field order.
    """
    fields = list(flags.keys())
    T = namedtuple(typename, fields)
    T.__new__.__defaults__ = (False,) * len(fields)
    T.wire_names = tuple(flags[f] for f in fields)

    def from_wire(cls, values):
        present = set(values)
        return cls(*(name in present for name in cls.wire_names))

    def to_wire(self):
        return [name for name, flag in zip(self.wire_names, self) if flag]

    T.from_wire = classmethod(from_wire)
    T.to_wire = to_wire
    return T


HandsfreeFeatures = flag_set('HandsfreeFeatures', {
    'voice_recognition': 'voice-recognition',
    'attach_voice_tag': 'attach-voice-tag',
    'echo_canceling_and_noise_reduction': 'echo-canceling-and-noise-reduction',
    'three_way_calling': 'three-way-calling',
    'release_all_held': 'release-all-held',
    'release_specified_active_call': 'release-specified-active-call',
    'private_chat': 'private-chat',
    'create_multiparty': 'create-multiparty',
    'transfer': 'transfer',
    'hf_indicators': 'hf-indicators',
})
