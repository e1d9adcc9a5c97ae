from ofono.codecs.codecs import BooleanCodec, StringCodec, StringListCodec
from ofono.objects.base import Mirror, Property
from ofono.objects.capabilities import MODEM


class Modem(Mirror):
    """ Mirror of an org.ofono.Modem object.
        The interfaces property is the capability set that decides which other mirrors can be built for the modem.

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/modem-api.txt
    """
    interface = MODEM

    online = Property('Online', BooleanCodec(), writable=True)
    powered = Property('Powered', BooleanCodec(), writable=True)
    lockdown = Property('Lockdown', BooleanCodec(), writable=True)
    emergency = Property('Emergency', BooleanCodec(), optional=True)
    name = Property('Name', StringCodec(), optional=True)
    manufacturer = Property('Manufacturer', StringCodec(), optional=True)
    model = Property('Model', StringCodec(), optional=True)
    revision = Property('Revision', StringCodec(), optional=True)
    serial = Property('Serial', StringCodec(), optional=True)
    features = Property('Features', StringListCodec(), optional=True)
    interfaces = Property('Interfaces', StringListCodec())
    type = Property('Type', StringCodec())

    def supports(self, interface):
        return interface in (self.interfaces or ())

    async def set_online(self, online):
        await self.set_property('online', online)

    async def set_powered(self, powered):
        await self.set_property('powered', powered)

    async def set_lockdown(self, lockdown):
        await self.set_property('lockdown', lockdown)
