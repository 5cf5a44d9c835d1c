# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 22:01:10
# @Author : Kariko Lin

from .model import GLOBAL_SECTION, Section, Document
from .parser import VConfigParser

__all__ = ['GLOBAL_SECTION', 'Section', 'Document', 'VConfigParser']
