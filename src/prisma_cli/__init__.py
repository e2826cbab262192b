# -*- coding: utf-8 -*-

__title__ = 'prisma-cli'
__author__ = 'RobertCraigie'
__license__ = 'APACHE'
__version__ = '0.1.0'


from .errors import *
