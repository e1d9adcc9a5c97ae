import os
import sys
import tempfile
import unittest
from types import SimpleNamespace

from configobj import ConfigObjError
from hamcrest import assert_that, equal_to, is_, has_property, is_not

from ofono.config.config import config_filename, load_config, apply_conf_path, configure_module, reconstruct_name

service = None
timeout = None


class ConfigTestCase(unittest.TestCase):

    def test_can_retrieve_default_config_file(self):
        file = config_filename('connector.default')
        assert_that(os.path.exists(file), is_(True), "expected config path %s to exist" % file)

    def test_defaults_are_validated_and_typed(self):
        config = load_config(user_file=os.devnull)
        section = config['ofono']['connector']['dbusconn']
        assert_that(section['service'], is_('org.ofono'))
        assert_that(section['bus'], is_('system'))
        assert_that(section['timeout'], is_(equal_to(25.0)))
        assert_that(config['ofono']['monitor']['log_level'], is_('INFO'))

    def test_user_file_overrides_defaults(self):
        with tempfile.NamedTemporaryFile('w', suffix='.cfg', delete=False) as f:
            f.write("[ofono]\n[[connector]]\n[[[dbusconn]]]\nbus = session\ntimeout = 2.5\n")
        try:
            section = load_config(user_file=f.name)['ofono']['connector']['dbusconn']
        finally:
            os.unlink(f.name)
        assert_that(section['bus'], is_('session'))
        assert_that(section['timeout'], is_(2.5))
        assert_that(section['service'], is_('org.ofono'))

    def test_invalid_user_value_fails_validation(self):
        with tempfile.NamedTemporaryFile('w', suffix='.cfg', delete=False) as f:
            f.write("[ofono]\n[[connector]]\n[[[dbusconn]]]\nbus = carrier-pigeon\n")
        try:
            with self.assertRaises(ConfigObjError):
                load_config(user_file=f.name)
        finally:
            os.unlink(f.name)

    def test_apply_sets_only_existing_attributes(self):
        target = SimpleNamespace(service=None)
        conf = {'ofono': {'connector': {'dbusconn': {'service': 'org.example', 'unknown': 1}}}}
        apply_conf_path(conf, ['ofono', 'connector', 'dbusconn'], target)
        assert_that(target.service, is_('org.example'))
        assert_that(target, is_not(has_property('unknown')))

    def test_apply_missing_section_leaves_target(self):
        target = SimpleNamespace(service='x')
        apply_conf_path({'ofono': {}}, ['ofono', 'connector', 'dbusconn'], target)
        assert_that(target.service, is_('x'))

    def test_can_apply_to_module(self):
        this_module = sys.modules[__name__]
        apply_conf_path({'sample': {'service': 'org.test', 'timeout': 4, 'missing_value': 1}}, ['sample'], this_module)
        assert_that(service, is_('org.test'))
        assert_that(timeout, is_(4))
        assert_that(this_module, is_not(has_property('missing_value')))

    def test_configure_module_uses_module_name(self):
        module = SimpleNamespace(__name__='ofono.sample', __file__='/x/ofono/sample.py', level=None)
        configure_module(module, config={'ofono': {'sample': {'level': 'DEBUG'}}})
        assert_that(module.level, is_('DEBUG'))

    def test_reconstruct_name(self):
        assert_that(reconstruct_name('/usr/lib/ofono/connector/dbusconn.py', 2), is_('ofono.connector.dbusconn'))
        assert_that(reconstruct_name('C:\\drive\\dir\\module.py', 0), is_('module'))


if __name__ == '__main__':
    unittest.main()
