"""
ofono connector - typed, live mirrors of the modems, calls and network state exported by the ofono telephony
service.

These subpackages exist:

connector: the bus connection the mirrors are built on, and its dbus-fast implementation
codecs: conversion of bus values to python values
objects: the mirrors: Directory, Modem, VoiceCallManager, VoiceCall, NetworkRegistration, NetworkOperator, Handsfree
config: layered configuration files
"""
from ofono.errors import OfonoError
from ofono.connector.base import Connection, RemoteFault
from ofono.codecs.codecs import DecodeAnomaly
from ofono.codecs.types import VoiceCallState, NetworkRegistrationMode, NetworkRegistrationStatus, \
    NetworkTechnology, OperatorStatus, HandsfreeFeatures
from ofono.objects import Directory, Modem, VoiceCallManager, VoiceCall, NetworkRegistration, NetworkOperator, \
    Handsfree, CapabilityError, PropertyNotWritableError, PropertyChangedEvent, ObjectAddedEvent, ObjectRemovedEvent, \
    SignalEvent, DiagnosticEvent
