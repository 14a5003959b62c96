'''
The warnings module defines the warning categories emitted by dimutils.
'''

import warnings


class DimutilsWarning(Warning):
    'Base class for warnings from dimutils.'


class DimutilsDeprecationWarning(DimutilsWarning):
    'Warning about deprecated dimutils features.'


class DimutilsIntegrityWarning(DimutilsWarning):
    'Warning about incomplete unit data.'


def warn(message, category=DimutilsWarning, stacklevel=1):
    warnings.warn(message, category, stacklevel=stacklevel)


def deprecation(message):
    warnings.warn(message, DimutilsDeprecationWarning, stacklevel=2)


# vim:sw=4:sts=4:et
