#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import locale


_classic_spaces = frozenset(' \t\n\v\f\r')


class LocaleRef(object):
  """Character classification and the locale-dependent tokens scanners need.

  This is a view: it is copied freely and never owns process locale state.
  """
  __slots__ = (
      '_spaces', 'decimal_point', 'thousands_separator', 'truename',
      'falsename', 'localized')

  def __init__(self, spaces=None, decimal_point='.', thousands_separator=',',
               truename='true', falsename='false'):
    # spaces=None means "whatever str.isspace() says"
    self._spaces = spaces
    self.decimal_point = decimal_point
    self.thousands_separator = thousands_separator
    self.truename = truename
    self.falsename = falsename
    self.localized = spaces is None

  @classmethod
  def classic(cls):
    return cls(spaces=_classic_spaces)

  @classmethod
  def from_system(cls):
    conv = locale.localeconv()
    return cls(
        spaces=None,
        decimal_point=conv.get('decimal_point') or '.',
        thousands_separator=conv.get('thousands_sep') or ',')

  def is_space(self, ch):
    if self._spaces is None:
      return ch.isspace()
    return ch in self._spaces

  def is_digit(self, ch):
    return '0' <= ch <= '9'

  def __eq__(self, other):
    if not isinstance(other, LocaleRef):
      return NotImplemented
    return (self._spaces == other._spaces
            and self.decimal_point == other.decimal_point
            and self.thousands_separator == other.thousands_separator
            and self.truename == other.truename
            and self.falsename == other.falsename)

  def __hash__(self):
    return hash((self.decimal_point, self.thousands_separator, self.truename,
                 self.falsename, self.localized))

  def __repr__(self):
    kind = 'system' if self.localized else 'classic'
    return 'locale(%s, %s)' % (kind, repr(self.decimal_point))
