#!/usr/bin/env python3
"""
Logs the modems known to ofono, and every change to them, until interrupted.

    python -m ofono.monitor
"""
import asyncio
import logging
import sys
from enum import Enum

import simplejson

from ofono.config.config import configure_module
from ofono.connector.dbusconn import DBusConnection
from ofono.objects.capabilities import MODEM, VOICE_CALL, VOICE_CALL_MANAGER
from ofono.objects.directory import Directory
from ofono.objects.voicecallmanager import VoiceCallManager

logger = logging.getLogger(__name__)

log_level = 'INFO'
configure_module(sys.modules[__name__])


def _json_default(o):
    if isinstance(o, Enum):
        return o.value
    raise TypeError("%r is not JSON serializable" % (o,))


def snapshot_json(mirror):
    return simplejson.dumps(mirror.snapshot.as_dict(), default=_json_default, sort_keys=True)


class EventLogger:
    def __call__(self, event):
        logger.info(event)


class ModemMonitor:
    """ Follows each modem, and its calls when the modem has a call manager. Mirrors are closed when the service
        removes the object they follow. """

    def __init__(self, connection):
        self.connection = connection
        self.log = EventLogger()
        self.followed = {}
        self._tasks = set()

    def follow(self, mirror):
        logger.info("%r %s", mirror, snapshot_json(mirror))
        mirror.events.subscribe('change', self.log)
        mirror.events.subscribe('diagnostic', self.log)
        self.followed[mirror.path, mirror.interface] = mirror

    def forget(self, path, interface):
        mirror = self.followed.pop((path, interface), None)
        if mirror is not None:
            logger.info("%r removed", mirror)
            mirror.close()

    async def follow_modem(self, modem):
        self.follow(modem)
        if modem.supports(VOICE_CALL_MANAGER):
            calls = await VoiceCallManager.of_modem(modem, self.connection)
            calls.events.added += lambda event: self.follow(event.object)
            calls.events.removed += lambda event: self.forget(event.path, VOICE_CALL)
            self.followed[modem.path, calls.interface] = calls
            for call in await calls.get_calls():
                self.follow(call)

    def modem_added(self, event):
        task = asyncio.get_running_loop().create_task(self.follow_modem(event.object))
        self._tasks.add(task)
        task.add_done_callback(self._follow_done)

    def modem_removed(self, event):
        self.forget(event.path, VOICE_CALL_MANAGER)
        self.forget(event.path, MODEM)

    def _follow_done(self, task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("could not follow modem: %s", task.exception())

    def modems(self):
        return [m for (path, interface), m in self.followed.items() if interface == MODEM]

    def close(self):
        for mirror in self.followed.values():
            mirror.close()
        self.followed.clear()


async def watch(connection):
    directory = Directory.attach(connection)
    monitor = ModemMonitor(connection)
    directory.events.added += monitor.modem_added
    directory.events.removed += monitor.modem_removed
    try:
        for modem in await directory.get_modems():
            await monitor.follow_modem(modem)
        logger.info("watching %d modem(s)", len(monitor.modems()))
        await asyncio.Event().wait()
    finally:
        monitor.close()
        directory.close()


async def run():
    connection = await DBusConnection.connect()
    try:
        await watch(connection)
    finally:
        connection.close()


def monitor():
    root = logging.getLogger()
    root.addHandler(logging.StreamHandler())
    root.setLevel(log_level)
    logger.info("starting ofono monitor")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass
    finally:
        logger.info("exiting monitor")


if __name__ == '__main__':
    monitor()
