from ofono.codecs.codecs import WireValue, DecodeAnomaly, Codec, BooleanCodec, IntegerCodec, StringCodec, \
    StringListCodec, EnumCodec, FlagSetCodec, decode, encode, lookup
from ofono.codecs.types import VoiceCallState, NetworkRegistrationMode, NetworkRegistrationStatus, \
    NetworkTechnology, OperatorStatus, HideCallerId, HandsfreeFeatures, flag_set
