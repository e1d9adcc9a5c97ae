from os import path
from setuptools import setup

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='ofono-connector',
    version='0.1',
    description='Live, typed mirrors of the objects exported by the ofono telephony service',
    long_description=long_description,
    long_description_content_type='text/markdown',
    python_requires='>=3.8',
    install_requires=[
        'dbus-fast',
        'configobj',
        'simplejson',
    ],

    packages=[
        'ofono',
        'ofono.codecs',
        'ofono.config',
        'ofono.connector',
        'ofono.objects',
        'ofono.support',
        'ofono.test',
    ],

    package_data={
        'ofono.config': ['*.cfg'],
    },

    extras_require={
        'test': ['PyHamcrest', 'pytest', 'coverage'],
    },
)
