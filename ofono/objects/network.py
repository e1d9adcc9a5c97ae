from ofono.codecs.codecs import EnumCodec, IntegerCodec, StringCodec, StringListCodec
from ofono.codecs.types import NetworkRegistrationMode, NetworkRegistrationStatus, NetworkTechnology, OperatorStatus
from ofono.objects.base import Mirror, Property
from ofono.objects.capabilities import NETWORK_OPERATOR, NETWORK_REGISTRATION


class NetworkOperator(Mirror):
    """ Mirror of an org.ofono.NetworkOperator object, as listed by NetworkRegistration.get_operators()
        and scan().

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/network-api.txt
    """
    interface = NETWORK_OPERATOR

    name = Property('Name', StringCodec())
    status = Property('Status', EnumCodec(OperatorStatus))
    mobile_country_code = Property('MobileCountryCode', StringCodec())
    mobile_network_code = Property('MobileNetworkCode', StringCodec())
    technologies = Property('Technologies', StringListCodec(), optional=True)
    additional_information = Property('AdditionalInformation', StringCodec(), optional=True)

    async def register(self):
        """ Registers manually to this operator. """
        await self._call('Register')


class NetworkRegistration(Mirror):
    """ Mirror of the org.ofono.NetworkRegistration interface of a modem.

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/network-api.txt
    """
    interface = NETWORK_REGISTRATION

    mode = Property('Mode', EnumCodec(NetworkRegistrationMode))
    status = Property('Status', EnumCodec(NetworkRegistrationStatus))
    location_area_code = Property('LocationAreaCode', IntegerCodec('q'), optional=True)
    cell_id = Property('CellId', IntegerCodec('u'), optional=True)
    mobile_country_code = Property('MobileCountryCode', StringCodec(), optional=True)
    mobile_network_code = Property('MobileNetworkCode', StringCodec(), optional=True)
    technology = Property('Technology', EnumCodec(NetworkTechnology), optional=True)
    name = Property('Name', StringCodec())
    strength = Property('Strength', IntegerCodec('y'), optional=True)
    base_station = Property('BaseStation', StringCodec(), optional=True)

    async def register(self):
        """ Registers to the home network, or returns to automatic registration. """
        await self._call('Register')

    async def get_operators(self):
        """ Retrieves the operators known from the last scan, without scanning.
        :return: a list of NetworkOperator mirrors
        """
        return await self._operators('GetOperators')

    async def scan(self):
        """ Scans for operators. This can take a long time.
        :return: a list of NetworkOperator mirrors
        """
        return await self._operators('Scan')

    async def _operators(self, member):
        reply = await self._call(member)
        return NetworkOperator.from_listing(reply[0], self.connection)
