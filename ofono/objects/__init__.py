from ofono.objects.base import Mirror, RemoteObject, Property, Snapshot, PropertyNotWritableError, ObjectEvent, \
    PropertyChangedEvent, ObjectAddedEvent, ObjectRemovedEvent, SignalEvent, DiagnosticEvent, Diagnostic
from ofono.objects.capabilities import CapabilityError, check_capability, require_capability
from ofono.objects.directory import Directory
from ofono.objects.handsfree import Handsfree
from ofono.objects.modem import Modem
from ofono.objects.network import NetworkOperator, NetworkRegistration
from ofono.objects.voicecall import VoiceCall
from ofono.objects.voicecallmanager import VoiceCallManager
