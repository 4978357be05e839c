#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import enum

from .localeref import LocaleRef


class Method(enum.Enum):
  # Convert the collected characters with int() / float().
  STRTO = 'strto'
  # Accumulate integer digits one at a time. Floats fall back to STRTO.
  CUSTOM = 'custom'


class Options(object):
  """Per-call configuration. The engine passes it through untouched."""
  __slots__ = 'int_method', 'float_method', 'locale', 'explain'

  def __init__(self, int_method=Method.STRTO, float_method=Method.STRTO,
               locale=None, explain=False):
    self.int_method = int_method
    self.float_method = float_method
    self.locale = locale
    self.explain = explain

  def get_locale_ref(self):
    if self.locale is None:
      return LocaleRef.classic()
    return self.locale

  def copy(self):
    return Options(self.int_method, self.float_method, self.locale,
                   self.explain)

  def __repr__(self):
    return 'options(int=%s, float=%s, locale=%s)' % (
        self.int_method.value, self.float_method.value, repr(self.locale))
