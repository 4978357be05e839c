#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

"""Result channel shared by every fallible operation in the scanning engine.

Recoverable failures (malformed format strings, unmatched input, missing
arguments) are values: an Error with a code and a message, carried by a
Result. Defects in the calling code are not values; they raise
ContractViolation through expect().
"""

import enum


class ErrorCode(enum.Enum):
  GOOD = 'good'
  END_OF_STREAM = 'end_of_stream'
  INVALID_FORMAT_STRING = 'invalid_format_string'
  INVALID_SCANNED_VALUE = 'invalid_scanned_value'
  INVALID_OPERATION = 'invalid_operation'
  VALUE_OUT_OF_RANGE = 'value_out_of_range'
  INVALID_ARGUMENT = 'invalid_argument'
  STREAM_SOURCE_ERROR = 'stream_source_error'
  UNRECOVERABLE_STREAM_ERROR = 'unrecoverable_stream_error'
  UNRECOVERABLE_INTERNAL_ERROR = 'unrecoverable_internal_error'

  def __str__(self):
    return self.value


_unrecoverable_codes = frozenset((
    ErrorCode.UNRECOVERABLE_STREAM_ERROR,
    ErrorCode.UNRECOVERABLE_INTERNAL_ERROR,
))


class ScanError(Exception):
  def __init__(self, error):
    super(ScanError, self).__init__('%s: %s' % (error.code, error.msg))
    self.error = error

  @property
  def code(self):
    return self.error.code


class ContractViolation(AssertionError):
  pass


def expect(condition, message='Precondition violated'):
  if not condition:
    raise ContractViolation(message)


class Error(object):
  __slots__ = 'code', 'msg'

  def __init__(self, code=ErrorCode.GOOD, msg=''):
    self.code = code
    self.msg = msg

  @classmethod
  def good(cls):
    return cls()

  def is_recoverable(self):
    return self.code not in _unrecoverable_codes

  def raise_for_error(self):
    if not self:
      raise ScanError(self)

  def __bool__(self):
    # An Error is truthy when it is *not* an error, so `if not err:` reads as
    # "if it failed".
    return self.code is ErrorCode.GOOD

  def __eq__(self, other):
    if isinstance(other, ErrorCode):
      return self.code is other
    if isinstance(other, Error):
      return self.code is other.code
    return NotImplemented

  def __ne__(self, other):
    result = self.__eq__(other)
    return result if result is NotImplemented else not result

  def __hash__(self):
    return hash(self.code)

  def __str__(self):
    if self.msg:
      return '%s: %s' % (self.code, self.msg)
    return str(self.code)

  def __repr__(self):
    return 'error(%s, %s)' % (self.code.value, repr(self.msg))


class Result(object):
  """Either a value or an Error. Falsy when it holds an error."""
  __slots__ = '_value', '_error'

  def __init__(self, value=None, error=None):
    if error is not None and error:
      # A good Error is not a failure; keep the value side.
      error = None
    self._value = value
    self._error = error

  @classmethod
  def ok(cls, value=None):
    return cls(value)

  @classmethod
  def fail(cls, code, msg=''):
    return cls(error=Error(code, msg))

  @classmethod
  def from_error(cls, error):
    return cls(error=error)

  @property
  def value(self):
    expect(self._error is None, 'Result holds an error, not a value')
    return self._value

  @property
  def error(self):
    return self._error if self._error is not None else Error.good()

  def has_value(self):
    return self._error is None

  def unwrap(self):
    if self._error is not None:
      raise ScanError(self._error)
    return self._value

  def value_or(self, default):
    return self._value if self._error is None else default

  def __bool__(self):
    return self._error is None

  def __repr__(self):
    if self._error is None:
      return 'result(%s)' % repr(self._value)
    return 'result(%s)' % repr(self._error)
