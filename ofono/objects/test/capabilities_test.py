import unittest

from hamcrest import assert_that, is_, none, instance_of, contains_string

from ofono.objects.capabilities import CapabilityError, check_capability, require_capability, HANDSFREE, \
    NETWORK_REGISTRATION, VOICE_CALL_MANAGER


class CheckCapabilityTest(unittest.TestCase):

    def test_present_interface_passes(self):
        assert_that(check_capability([VOICE_CALL_MANAGER, HANDSFREE], HANDSFREE), is_(none()))

    def test_missing_interface_is_described(self):
        error = check_capability([VOICE_CALL_MANAGER], NETWORK_REGISTRATION, '/modem0')
        assert_that(error, instance_of(CapabilityError))
        assert_that(error.object, is_('/modem0'))
        assert_that(error.missing_interface, is_(NETWORK_REGISTRATION))
        assert_that(str(error), contains_string(NETWORK_REGISTRATION))

    def test_no_capabilities(self):
        assert_that(check_capability(None, HANDSFREE), instance_of(CapabilityError))
        assert_that(check_capability([], HANDSFREE), instance_of(CapabilityError))


class RequireCapabilityTest(unittest.TestCase):

    def test_raises_when_missing(self):
        with self.assertRaises(CapabilityError) as ctx:
            require_capability([HANDSFREE], VOICE_CALL_MANAGER, '/hfp/modem')
        assert_that(ctx.exception.missing_interface, is_(VOICE_CALL_MANAGER))

    def test_passes_when_present(self):
        require_capability([HANDSFREE], HANDSFREE, '/hfp/modem')


if __name__ == '__main__':
    unittest.main()
