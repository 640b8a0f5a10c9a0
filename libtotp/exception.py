# -*- coding: utf-8 -*-
"""
# HOTP/TOTP generator
# Copyright (c) 2019-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

__all__ = [
	"TotpError",
	"InvalidSecretCharacter",
	"InvalidPeriod",
	"InvalidDigits",
	"InvalidCounter",
	"InvalidOption",
	"UnsupportedAlgorithm",
	"HashBackendFailure",
	"TimestampOverflow",
]

class TotpError(Exception):
	"""Main HOTP/TOTP exception.
	"""

class InvalidSecretCharacter(TotpError):
	"""The secret contains a character outside of the encoding alphabet.
	"""

class InvalidPeriod(TotpError):
	"""The TOTP period is not a positive integer.
	"""

class InvalidDigits(TotpError):
	"""The number of digits is outside of 1 to 10.
	"""

class InvalidCounter(TotpError):
	"""The HOTP counter does not fit into 64 bits.
	"""

class InvalidOption(TotpError):
	"""Unknown option or option value.
	"""

class UnsupportedAlgorithm(TotpError):
	"""The HMAC hash algorithm is not supported.
	"""

class HashBackendFailure(TotpError):
	"""No HMAC backend was able to compute the signature.
	"""

class TimestampOverflow(TotpError):
	"""The time step does not fit into the 64 bit counter.
	"""
