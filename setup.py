from setuptools import setup

long_description = """
Dimutils is a Python library for the dimensional algebra of units of measure
as modelled by the QUDT vocabularies. It represents the physical dimension of
a unit as a dimension vector, composes units into products of factor units
raised to integer powers, converts values between compatible units including
units with offsets such as degrees Celsius, and resolves a product of units to
the registered derived unit it corresponds to.

When several units are structurally equal to a requested product, for instance
the newton and the kilogram meter per square second, dimutils orders them with
a deterministic ranking that prefers exact factorizations, current over
deprecated units and named over composed units. A similarity score based on an
optimal assignment between factorizations supports suggestions for products
that no registered unit matches exactly.
"""

import os, re
with open(os.path.join('dimutils', '__init__.py')) as f:
  version = next(filter(None, map(re.compile("^__version__ = version = '([a-zA-Z0-9.]+)'$").match, f))).group(1)

setup(
  name = 'dimutils',
  version = version,
  description = 'Dimensional algebra and derived unit resolution for QUDT style units',
  packages = ['dimutils'],
  long_description = long_description,
  license = 'MIT',
  python_requires = '>=3.8',
  install_requires = ['numpy>=1.12', 'treelog>=1.0b5', 'stringly'],
  command_options = dict(
    test=dict(test_loader=('setup.py', 'unittest:TestLoader')),
  ),
)
