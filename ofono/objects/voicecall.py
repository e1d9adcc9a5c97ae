from ofono.codecs.codecs import BooleanCodec, EnumCodec, IntegerCodec, StringCodec
from ofono.codecs.types import VoiceCallState
from ofono.objects.base import Mirror, Property
from ofono.objects.capabilities import VOICE_CALL


class VoiceCall(Mirror):
    """ Mirror of an org.ofono.VoiceCall object. Calls are created and removed by the VoiceCallManager.

        Besides property changes, the DisconnectReason signal is republished on events.disconnect_reason
        as a SignalEvent whose data is the reason string (local, remote or network.)

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/voicecall-api.txt
    """
    interface = VOICE_CALL
    event_kinds = ('change', 'disconnect_reason', 'diagnostic')
    signals = {
        'PropertyChanged': '_property_changed',
        'DisconnectReason': '_disconnect_reason',
    }

    line_identification = Property('LineIdentification', StringCodec())
    incoming_line = Property('IncomingLine', StringCodec(), optional=True)
    name = Property('Name', StringCodec())
    multiparty = Property('Multiparty', BooleanCodec())
    state = Property('State', EnumCodec(VoiceCallState))
    start_time = Property('StartTime', StringCodec(), optional=True)
    information = Property('Information', StringCodec(), optional=True)
    icon = Property('Icon', IntegerCodec('y'), optional=True)
    emergency = Property('Emergency', BooleanCodec())
    remote_held = Property('RemoteHeld', BooleanCodec())
    remote_multiparty = Property('RemoteMultiparty', BooleanCodec())

    async def deflect(self, number):
        """ Deflects an incoming or waiting call to the given number. """
        await self._call('Deflect', 's', (number,))

    async def hangup(self):
        await self._call('Hangup')

    async def answer(self):
        """ Answers an incoming call. The state change arrives later as a PropertyChanged signal. """
        await self._call('Answer')

    def _disconnect_reason(self, reason):
        self._forward('disconnect_reason', 'DisconnectReason', reason)
