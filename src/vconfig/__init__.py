# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 21:08:32
# @Author : Kariko Lin

import logging

from .errors import (
    VConfigError, ParseError, SerializeError,
    NotFoundError, VariableNotFoundError, SectionNotFoundError,
    MultipleValuesError, MultipleSectionsError, DuplicateSectionError
)
from .ini import GLOBAL_SECTION, Section, Document, VConfigParser

__all__ = [
    'GLOBAL_SECTION', 'Section', 'Document', 'VConfigParser',
    'VConfigError', 'ParseError', 'SerializeError',
    'NotFoundError', 'VariableNotFoundError', 'SectionNotFoundError',
    'MultipleValuesError', 'MultipleSectionsError', 'DuplicateSectionError'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
