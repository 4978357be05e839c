#!/usr/bin/python
# -*- coding: utf-8 -*-
# vim:ts=2:sw=2:et:ai

import chardet

from .result import Error, ErrorCode, Result, ScanError


class StringStream(object):
  """Character source over an in-memory string.

  Only characters previously handed out by read_char() can be put back, most
  recent first.
  """
  __slots__ = '_text', '_pos'

  def __init__(self, text):
    self._text = text
    self._pos = 0

  def read_char(self):
    if self._pos >= len(self._text):
      return Result.fail(ErrorCode.END_OF_STREAM, 'End of stream')
    ch = self._text[self._pos]
    self._pos += 1
    return Result.ok(ch)

  def putback(self, ch):
    if self._pos == 0 or self._text[self._pos - 1] != ch:
      return Error(ErrorCode.INVALID_OPERATION,
                   'Cannot put back a character that was not read last')
    self._pos -= 1
    return Error.good()

  def remaining(self):
    return self._text[self._pos:]

  @property
  def chars_read(self):
    return self._pos

  def __repr__(self):
    return 'stream(%s, at %d)' % (repr(self._text), self._pos)


def detect_encoding(data):
  encoding = chardet.detect(data)['encoding']
  # chardet gives up on empty or very short input; utf-8 is a superset of
  # the ascii it would have guessed anyway.
  return encoding or 'utf-8'


class BytesStream(StringStream):
  __slots__ = 'encoding',

  def __init__(self, data, encoding=None):
    if encoding is None:
      encoding = detect_encoding(data)
    try:
      text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
      raise ScanError(Error(
          ErrorCode.STREAM_SOURCE_ERROR,
          'Cannot decode input as %s: %s' % (encoding, e))) from e
    super(BytesStream, self).__init__(text)
    self.encoding = encoding


def make_stream(source):
  if isinstance(source, str):
    return StringStream(source)
  if isinstance(source, (bytes, bytearray)):
    return BytesStream(bytes(source))
  if hasattr(source, 'read_char') and hasattr(source, 'putback'):
    return source
  raise TypeError(
      'Cannot scan from %s; expected str, bytes or a stream' %
      type(source).__name__)


def skip_whitespace(stream, locale):
  """Consumes whitespace from the stream. Running out of input is fine."""
  while True:
    ch = stream.read_char()
    if not ch:
      if ch.error == ErrorCode.END_OF_STREAM:
        return Error.good()
      return ch.error
    if not locale.is_space(ch.value):
      return stream.putback(ch.value)
