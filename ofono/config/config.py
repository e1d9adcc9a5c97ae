import logging
import os
import platform

from configobj import ConfigObj, ConfigObjError, Section, flatten_errors
try:
    from configobj.validate import Validator
except ImportError:     # configobj < 5.1 ships validate as a top level module
    from validate import Validator

logger = logging.getLogger(__name__)

config_extension = '.cfg'
default_name = 'connector'


def config_filename(name):
    dirname = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(dirname, name + config_extension)


def user_config_filename(name):
    return os.path.expanduser('~/ofono_' + name + config_extension)


def load_config_file_base(file, must_exist=True):
    return ConfigObj(file, interpolation='Template') if must_exist or os.path.exists(file) else ConfigObj()


def config_flavor_file(name, subpart=None, must_exist=True) -> ConfigObj:
    configname = name if not subpart else name + '.' + subpart
    return load_config_file_base(config_filename(configname), must_exist)


def load_config(name=default_name, user_file=None):
    """ Loads the named configuration. Later layers override earlier ones:
        the packaged defaults, the platform file, the user file (~/ofono_<name>.cfg) and the local file.
        The merged result is validated against the schema file.
    """
    default_config = config_flavor_file(name, 'default')
    platform_config = config_flavor_file(name, platform.system().lower(), must_exist=False)
    user_config = load_config_file_base(user_file or user_config_filename(name), must_exist=False)
    local_config = config_flavor_file(name, must_exist=False)
    config = ConfigObj(configspec=config_filename(name + '.schema'))
    config.merge(default_config)
    config.merge(platform_config)
    config.merge(user_config)
    config.merge(local_config)

    result = config.validate(Validator())
    if result is not True:
        for section_list, key, res in flatten_errors(config, result):
            if key is not None:
                logger.error('The "%s" key in the section "%s" failed validation: %s',
                             key, ', '.join(section_list), res)
            else:
                logger.error('The following section was missing: %s', ', '.join(section_list))
        raise ConfigObjError("the config failed validation %s" % result)
    return config


def apply(target, name, config=None):
    conf = config if config is not None else load_config()
    apply_conf_path(conf, name.split('.'), target)


def apply_conf_path(conf: Section, name_parts, target):
    for p in name_parts:    # lookup specific section
        conf = conf.get(p, None)
        if conf is None:
            return
    apply_conf(conf, target)


def apply_conf(conf: Section, target):
    for k, v in conf.items():
        if hasattr(target, k):
            setattr(target, k, v)


def reconstruct_name(path, package_depth):
    """
    >>> reconstruct_name('/usr/lib/ofono/connector/dbusconn.py', 2)
    'ofono.connector.dbusconn'
    >>> reconstruct_name('C:\\\\drive\\\\dir\\\\module.py', 0)
    'module'
    """
    path = path.replace('\\', '/')
    parts = path.split('/')
    parts[-1] = os.path.splitext(parts[-1])[0]
    return '.'.join(parts[-package_depth - 1:])


def build_module_name(module, package_depth):
    return module.__name__ if module.__name__ != '__main__' else reconstruct_name(module.__file__, package_depth)


def configure_module(module, package_depth=1, config=None):
    """ Applies the configuration section named after the module to the module's attributes.
        The package depth is needed when a module is run as main. Then the name isn't the fully qualified name, but
        just '__main__'. To reconstruct the original module name, we combine the package depth with the filename.
    """
    apply(module, build_module_name(module, package_depth), config)
