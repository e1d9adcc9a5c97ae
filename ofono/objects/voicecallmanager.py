import re

from ofono.codecs.codecs import StringListCodec
from ofono.codecs.types import HideCallerId
from ofono.objects.base import Mirror, Property
from ofono.objects.capabilities import VOICE_CALL_MANAGER, require_capability
from ofono.objects.voicecall import VoiceCall

tones_pattern = re.compile(r'[0-9A-Da-d*#]*')


class VoiceCallManager(Mirror):
    """ Mirror of the org.ofono.VoiceCallManager interface of a modem.

        CallAdded is republished on events.added with a VoiceCall mirror built from the signal's property map, and
        CallRemoved on events.removed with the call's path. The manager keeps no reference to the calls: whoever
        handles the added event owns the call mirror, and should close() it when the call is removed.

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/voicecallmanager-api.txt
    """
    interface = VOICE_CALL_MANAGER
    event_kinds = ('change', 'added', 'removed', 'barring_active', 'forwarded', 'diagnostic')
    signals = {
        'PropertyChanged': '_property_changed',
        'CallAdded': '_call_added',
        'CallRemoved': '_call_removed',
        'BarringActive': '_barring_active',
        'Forwarded': '_forwarded',
    }

    emergency_numbers = Property('EmergencyNumbers', StringListCodec(), optional=True)

    @classmethod
    async def of_modem(cls, modem, connection):
        """ Follows the call manager of the modem. The properties are not fetched; use refresh() to read them.
        :raises CapabilityError: when the modem has no VoiceCallManager interface.
        """
        require_capability(modem.interfaces, cls.interface, modem.path)
        manager = cls(modem.path, connection)
        manager._listen()
        return manager

    async def get_calls(self):
        """ Retrieves the current calls.
        :return: a list of VoiceCall mirrors
        """
        reply = await self._call('GetCalls')
        return VoiceCall.from_listing(reply[0], self.connection)

    async def dial(self, number, hide_callerid=None):
        """ Dials a number.
        :param hide_callerid: None to use the network default, True to hide and False to show the caller id.
        :return: the path of the new call
        """
        reply = await self._call('Dial', 'ss', (number, HideCallerId.from_flag(hide_callerid).value))
        return reply[0]

    async def dial_last(self):
        await self._call('DialLast')

    async def transfer(self):
        """ Joins the active and held calls together and disconnects from both. """
        await self._call('Transfer')

    async def swap_calls(self):
        """ Swaps the active and held calls. """
        await self._call('SwapCalls')

    async def release_and_answer(self):
        await self._call('ReleaseAndAnswer')

    async def release_and_swap(self):
        await self._call('ReleaseAndSwap')

    async def hold_and_answer(self):
        await self._call('HoldAndAnswer')

    async def hangup_all(self):
        await self._call('HangupAll')

    async def private_chat(self, call):
        """ Splits the given call out of the multiparty call.
        :param call: a VoiceCall or the path of one
        :return: the paths of the calls still in the multiparty call
        """
        path = call.path if isinstance(call, VoiceCall) else call
        reply = await self._call('PrivateChat', 'o', (path,))
        return list(reply[0])

    async def create_multiparty(self):
        """ Joins the active and held calls into a multiparty call.
        :return: the paths of the calls in the multiparty call
        """
        reply = await self._call('CreateMultiparty')
        return list(reply[0])

    async def hangup_multiparty(self):
        await self._call('HangupMultiparty')

    async def send_tones(self, tones):
        """ Sends DTMF tones.
        :raises ValueError: when tones has characters other than 0-9, A-D, * and #. Nothing is sent in that case.
        """
        if not tones_pattern.fullmatch(tones):
            raise ValueError("invalid tone(s) in '%s'" % tones)
        await self._call('SendTones', 's', (tones,))

    def _call_added(self, path, properties):
        self._child_added(VoiceCall, 'CallAdded', path, properties)

    def _call_removed(self, path):
        self._child_removed(path)

    def _barring_active(self, barring_type):
        self._forward('barring_active', 'BarringActive', barring_type)

    def _forwarded(self, forwarded_type):
        self._forward('forwarded', 'Forwarded', forwarded_type)
