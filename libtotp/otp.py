# -*- coding: utf-8 -*-
"""
# HOTP/TOTP support
# Copyright (c) 2019-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

from libtotp.exception import *
from libtotp.hmacbackend import *
from libtotp.secret import *

from collections import namedtuple
import math
import time

__all__ = [
	"GenerationOptions",
	"TotpResult",
	"makeOptions",
	"timeStep",
	"stepToBytes",
	"truncate",
	"expiry",
	"hotp",
	"generate",
]

MAX_DIGITS	= 10
COUNTER_BYTES	= 8
COUNTER_MAX	= (1 << (COUNTER_BYTES * 8)) - 1

GenerationOptions = namedtuple("GenerationOptions",
	( "digits", "algorithm", "encoding", "period", "timestamp", "explicitZeroPad", ),
	defaults=( 6, "SHA-1", ENCODING_BASE32, 30, None, False, ))
GenerationOptions.__doc__ = """TOTP generation options.
digits: The number of digits to return. Can be 1 to 10.
algorithm: The name string of the hashing algorithm.
encoding: The secret string encoding. ENCODING_BASE32 or ENCODING_RAW.
period: The time step length in seconds.
timestamp: The time in milliseconds since the epoch. None means now.
explicitZeroPad: Left-pad short tokens with zeros to exactly 'digits' digits.
                 Otherwise a short token is returned as-is (legacy behavior).
"""

TotpResult = namedtuple("TotpResult", ( "otp", "expires", ))
TotpResult.__doc__ = """A TOTP token and its expiry time in milliseconds.
"""

def makeOptions(options=None, **overrides):
	"""Build a GenerationOptions tuple.
	options: None, a GenerationOptions tuple or a mapping of option names.
	overrides: Options that replace the ones in 'options'.
	Fields that are None take their default.
	"""
	try:
		if options is None:
			options = GenerationOptions()
		elif not isinstance(options, GenerationOptions):
			options = GenerationOptions(**options)
		if overrides:
			options = options._replace(**overrides)
	except (TypeError, ValueError) as e:
		raise InvalidOption("Invalid option: %s" % str(e))
	defaults = GenerationOptions._field_defaults
	return options._replace(**{ name : defaults[name]
				    for name in options._fields
				    if getattr(options, name) is None })

def _checkDigits(nrDigits):
	if (not isinstance(nrDigits, int) or
	    isinstance(nrDigits, bool) or
	    not (1 <= nrDigits <= MAX_DIGITS)):
		raise InvalidDigits("Invalid number of digits '%s'. "
				    "Can be 1 to %d." % (nrDigits, MAX_DIGITS))

def _checkPeriod(period):
	if (not isinstance(period, int) or
	    isinstance(period, bool) or
	    period <= 0):
		raise InvalidPeriod("Invalid period '%s'. "
				    "Must be a positive number of seconds." % period)

def _checkZeroPad(explicitZeroPad):
	if not isinstance(explicitZeroPad, bool):
		raise InvalidOption("Invalid explicitZeroPad '%s'. "
				    "Must be True or False." % (explicitZeroPad,))

def _toMilliseconds(timestamp):
	if timestamp is None:
		return time.time_ns() // 1000000
	if isinstance(timestamp, bool):
		raise InvalidOption("Invalid timestamp '%s'." % timestamp)
	if isinstance(timestamp, int):
		return timestamp
	if isinstance(timestamp, float):
		if not math.isfinite(timestamp):
			raise TimestampOverflow("Invalid timestamp '%s'." % timestamp)
		return math.floor(timestamp)
	raise InvalidOption("Invalid timestamp '%s'." % timestamp)

def timeStep(timestampMs, period):
	"""Get the TOTP time step.
	timestampMs: The time in milliseconds since the epoch.
	period: The time step length in seconds.
	Returns the number of periods elapsed since the epoch.
	"""
	_checkPeriod(period)
	step = (_toMilliseconds(timestampMs) // 1000) // period
	if not (0 <= step <= COUNTER_MAX):
		raise TimestampOverflow("The time step for timestamp '%s' and "
					"period %d does not fit into %d bytes." % (
					timestampMs, period, COUNTER_BYTES))
	return step

def stepToBytes(step):
	"""Render a counter or time step as 8 big endian bytes.
	"""
	try:
		return step.to_bytes(length=COUNTER_BYTES, byteorder="big", signed=False)
	except OverflowError:
		raise TimestampOverflow("The time step %d does not fit into %d bytes." % (
					step, COUNTER_BYTES))

def truncate(signature, nrDigits, explicitZeroPad=False):
	"""RFC 4226 dynamic truncation.
	signature: The HMAC signature bytes.
	nrDigits: The number of digits to return. Can be 1 to 10.
	explicitZeroPad: Left-pad a short token with zeros.
	Returns the token string.
	"""
	_checkDigits(nrDigits)
	if len(signature) < 20:
		raise TotpError("Invalid HMAC signature length %d." % len(signature))
	offset = signature[-1] & 0xF
	binCode = int.from_bytes(signature[offset:offset+4],
				 byteorder="big", signed=False) & 0x7FFFFFFF
	otp = ("%d" % binCode)[-nrDigits:]
	if explicitZeroPad:
		otp = otp.rjust(nrDigits, "0")
	return otp

def expiry(timestampMs, period):
	"""Get the time, in milliseconds, at which the current time step ends.
	"""
	_checkPeriod(period)
	periodMs = period * 1000
	return -(-(_toMilliseconds(timestampMs) + 1) // periodMs) * periodMs

def hotp(key, counter, nrDigits=6, hmacHash="SHA-1",
	 encoding=ENCODING_BASE32, explicitZeroPad=True):
	"""HOTP - An HMAC-Based One-Time Password Algorithm.
	key: The HOTP key. Either raw bytes or an encoded string.
	counter: The HOTP counter integer.
	nrDigits: The number of digits to return. Can be 1 to 10.
	hmacHash: The name string of the hashing algorithm.
	encoding: The encoding of 'key', if it is a string.
	explicitZeroPad: Left-pad a short token with zeros.
	Returns the calculated HOTP token string.
	"""
	_checkDigits(nrDigits)
	_checkZeroPad(explicitZeroPad)
	hmacHash = normalizeAlgorithm(hmacHash)
	if (not isinstance(counter, int) or
	    isinstance(counter, bool) or
	    not (0 <= counter <= COUNTER_MAX)):
		raise InvalidCounter("Invalid counter '%s'." % counter)
	if isinstance(key, str):
		key = decodeSecret(key, encoding)
	elif not isinstance(key, (bytes, bytearray)):
		raise TotpError("Invalid key type '%s'." % type(key).__name__)

	signature = HmacBackend.get().hmac(bytes(key), stepToBytes(counter), hmacHash)
	return truncate(signature, nrDigits, explicitZeroPad)

def generate(secret, options=None, **overrides):
	"""TOTP - Time-Based One-Time Password Algorithm.
	secret: The TOTP secret string.
	options: Optional GenerationOptions or a mapping of option names.
	overrides: Single options as keyword arguments.
	Returns a TotpResult with the token and its expiry time.
	"""
	options = makeOptions(options, **overrides)
	_checkDigits(options.digits)
	_checkPeriod(options.period)
	_checkZeroPad(options.explicitZeroPad)
	algorithm = normalizeAlgorithm(options.algorithm)
	if options.encoding not in ENCODINGS:
		raise InvalidOption("Invalid secret encoding '%s'." % options.encoding)
	timestampMs = _toMilliseconds(options.timestamp)

	key = decodeSecret(secret, options.encoding)
	step = timeStep(timestampMs, options.period)
	otp = hotp(key=key,
		   counter=step,
		   nrDigits=options.digits,
		   hmacHash=algorithm,
		   explicitZeroPad=options.explicitZeroPad)
	return TotpResult(otp=otp, expires=expiry(timestampMs, options.period))
