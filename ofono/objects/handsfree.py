from ofono.codecs.codecs import BooleanCodec, FlagSetCodec, IntegerCodec, StringListCodec
from ofono.codecs.types import HandsfreeFeatures
from ofono.objects.base import Mirror, Property
from ofono.objects.capabilities import HANDSFREE


class Handsfree(Mirror):
    """ Mirror of the org.ofono.Handsfree interface of a hands-free profile modem.

        see https://git.kernel.org/pub/scm/network/ofono/ofono.git/tree/doc/handsfree-api.txt
    """
    interface = HANDSFREE

    features = Property('Features', FlagSetCodec(HandsfreeFeatures))
    inband_ringing = Property('InbandRinging', BooleanCodec())
    voice_recognition = Property('VoiceRecognition', BooleanCodec(), writable=True)
    echo_canceling_noise_reduction = Property('EchoCancelingNoiseReduction', BooleanCodec(), optional=True,
                                              writable=True)
    battery_charge_level = Property('BatteryChargeLevel', IntegerCodec('y'))
    subscriber_numbers = Property('SubscriberNumbers', StringListCodec())
    distracted_driving_reduction = Property('DistractedDrivingReduction', BooleanCodec(), optional=True,
                                            writable=True)

    async def set_voice_recognition(self, enabled):
        await self.set_property('voice_recognition', enabled)

    async def set_echo_canceling_noise_reduction(self, enabled):
        await self.set_property('echo_canceling_noise_reduction', enabled)

    async def set_distracted_driving_reduction(self, enabled):
        await self.set_property('distracted_driving_reduction', enabled)

    async def request_phone_number(self):
        """ Asks the audio gateway for a phone number attached to a voice tag.
        :return: the phone number
        """
        reply = await self._call('RequestPhoneNumber')
        return reply[0]
