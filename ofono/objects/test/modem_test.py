import unittest

from hamcrest import assert_that, is_, empty

from ofono.codecs.codecs import WireValue
from ofono.objects.capabilities import MODEM, VOICE_CALL_MANAGER, HANDSFREE
from ofono.objects.modem import Modem
from ofono.test.fakebus import FakeConnection, modem_properties, b, s, as_


class ModemTest(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.connection = FakeConnection()
        self.sut = Modem.from_known_data('/hfp/org/bluez/hci0/dev_00_1A_7D_DA_71_13', modem_properties(
            HANDSFREE, Name=s('Phone'), Manufacturer=s('ACME'), Features=as_('net', 'sim'), Emergency=b(False),
            Type=s('hfp')), self.connection)

    def test_properties(self):
        assert_that(self.sut.name, is_('Phone'))
        assert_that(self.sut.manufacturer, is_('ACME'))
        assert_that(self.sut.features, is_(['net', 'sim']))
        assert_that(self.sut.emergency, is_(False))
        assert_that(self.sut.type, is_('hfp'))
        assert_that(self.sut.model, is_(None))

    def test_supports(self):
        assert_that(self.sut.supports(HANDSFREE), is_(True))
        assert_that(self.sut.supports(VOICE_CALL_MANAGER), is_(False))

    def test_capabilities_follow_the_modem(self):
        self.connection.emit(self.sut.path, MODEM, 'PropertyChanged', 'Interfaces',
                             as_(HANDSFREE, VOICE_CALL_MANAGER))
        assert_that(self.sut.supports(VOICE_CALL_MANAGER), is_(True))

    async def test_setters(self):
        await self.sut.set_powered(False)
        await self.sut.set_lockdown(True)
        assert_that([c.body for c in self.connection.calls], is_([
            ('Powered', WireValue('b', False)), ('Lockdown', WireValue('b', True))]))
        assert_that(self.sut.powered, is_(False))
        assert_that(self.sut.lockdown, is_(True))

    def test_emergency_is_not_writable(self):
        assert_that(Modem.properties()['emergency'].writable, is_(False))
        assert_that(Modem.property_for_wire_name('Emergency').name, is_('emergency'))

    def test_wire_names_are_unique(self):
        wire_names = [p.wire_name for p in Modem.properties().values()]
        assert_that(sorted(set(wire_names)), is_(sorted(wire_names)))
        assert_that(self.connection.calls, is_(empty()))


if __name__ == '__main__':
    unittest.main()
