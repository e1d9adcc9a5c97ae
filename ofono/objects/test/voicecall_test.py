import unittest

from hamcrest import assert_that, is_, empty, has_length, instance_of

from ofono.codecs.types import VoiceCallState
from ofono.objects.base import SignalEvent, DECODE_ANOMALY
from ofono.objects.capabilities import VOICE_CALL
from ofono.objects.voicecall import VoiceCall
from ofono.test.fakebus import FakeConnection, Call, call_properties, s, y

CALL = '/modem0/voicecall01'


class VoiceCallTest(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.connection = FakeConnection()
        self.sut = VoiceCall.from_known_data(CALL, call_properties(Icon=y(3)), self.connection)

    def state_changed(self, state):
        self.connection.emit(CALL, VOICE_CALL, 'PropertyChanged', 'State', s(state))

    def test_properties(self):
        assert_that(self.sut.state, is_(VoiceCallState.incoming))
        assert_that(self.sut.line_identification, is_('+15551234'))
        assert_that(self.sut.icon, is_(3))
        assert_that(self.sut.start_time, is_(None))
        assert_that(self.sut.multiparty, is_(False))

    def test_state_changes(self):
        received = []
        self.sut.events.change += received.append
        self.state_changed('active')
        self.connection.emit(CALL, VOICE_CALL, 'PropertyChanged', 'StartTime', s('2026-10-18T10:00:00+0000'))
        self.state_changed('disconnected')
        assert_that([e.after for e in received], is_([
            VoiceCallState.active, '2026-10-18T10:00:00+0000', VoiceCallState.disconnected]))

    def test_unknown_state_is_skipped(self):
        reported = []
        self.sut.events.diagnostic += reported.append
        with self.assertLogs('ofono.objects.base', 'WARNING'):
            self.state_changed('ringing')
        assert_that(self.sut.state, is_(VoiceCallState.incoming))
        assert_that([d.kind for d in reported], is_([DECODE_ANOMALY]))

    def test_disconnect_reason_is_a_separate_event(self):
        reasons, received = [], []
        self.sut.events.disconnect_reason += reasons.append
        self.sut.events.change += received.append
        self.connection.emit(CALL, VOICE_CALL, 'DisconnectReason', 'remote')
        assert_that(reasons, has_length(1))
        assert_that(reasons[0], instance_of(SignalEvent))
        assert_that(reasons[0].member, is_('DisconnectReason'))
        assert_that(reasons[0].data, is_(('remote',)))
        assert_that(received, is_(empty()))

    async def test_answer(self):
        await self.sut.answer()
        assert_that(self.connection.calls, is_([Call(CALL, VOICE_CALL, 'Answer', '', ())]))
        assert_that(self.sut.state, is_(VoiceCallState.incoming))

    async def test_hangup(self):
        await self.sut.hangup()
        assert_that(self.connection.members_called(), is_(['Hangup']))

    async def test_deflect(self):
        await self.sut.deflect('+15559876')
        assert_that(self.connection.calls, is_([Call(CALL, VOICE_CALL, 'Deflect', 's', ('+15559876',))]))


if __name__ == '__main__':
    unittest.main()
