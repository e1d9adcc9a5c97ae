from ofono.objects.base import RemoteObject
from ofono.objects.capabilities import MANAGER
from ofono.objects.modem import Modem

ROOT_PATH = '/'


class Directory(RemoteObject):
    """ The ofono manager: lists the modems and reports modems as they come and go.

        ModemAdded is republished on events.added with a Modem mirror, ModemRemoved on events.removed with the
        modem's path. Like the call manager, the directory keeps no reference to the modems.
    """
    interface = MANAGER
    event_kinds = ('added', 'removed', 'diagnostic')
    signals = {
        'ModemAdded': '_modem_added',
        'ModemRemoved': '_modem_removed',
    }

    def __init__(self, connection):
        super().__init__(ROOT_PATH, connection)

    @classmethod
    def attach(cls, connection):
        """ Creates a directory that follows modem additions and removals. """
        directory = cls(connection)
        directory._listen()
        return directory

    async def get_modems(self):
        """ Lists the modems known to the service.
        :return: a list of Modem mirrors
        """
        reply = await self._call('GetModems')
        return Modem.from_listing(reply[0], self.connection)

    def _modem_added(self, path, properties):
        self._child_added(Modem, 'ModemAdded', path, properties)

    def _modem_removed(self, path):
        self._child_removed(path)

    async def list(self):
        """ Same as get_modems(). """
        return await self.get_modems()
