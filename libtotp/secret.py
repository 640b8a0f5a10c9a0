# -*- coding: utf-8 -*-
"""
# OTP secret decoding
# Copyright (c) 2019-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

from libtotp.exception import *

__all__ = [
	"ENCODING_BASE32",
	"ENCODING_RAW",
	"ENCODINGS",
	"decodeSecret",
	"decodeBase32",
	"decodeRaw",
]

ENCODING_BASE32	= "base32"
ENCODING_RAW	= "raw"
ENCODINGS	= (ENCODING_BASE32, ENCODING_RAW)

BASE32_ALPHABET	= "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
BASE32_PAD	= "="

def _makeBase32Lookup():
	lookup = [ None ] * 0x100
	for value, char in enumerate(BASE32_ALPHABET):
		lookup[ord(char)] = value
		lookup[ord(char.lower())] = value
	return tuple(lookup)

# Symbol value for each character code up to 0xFF. None marks an invalid symbol.
_BASE32_LOOKUP = _makeBase32Lookup()

def decodeBase32(secret):
	"""Decode an RFC 4648 base32 string into bytes.
	Lower case letters are accepted.
	Trailing '=' padding is stripped and may have any length.
	Trailing bits that do not form a complete byte are dropped.
	"""
	length = len(secret.rstrip(BASE32_PAD))
	data = bytearray()
	value = 0
	nrBits = 0
	for i, char in enumerate(secret[:length]):
		code = ord(char)
		symbol = _BASE32_LOOKUP[code] if code < len(_BASE32_LOOKUP) else None
		if symbol is None:
			raise InvalidSecretCharacter(
				"Invalid base32 character in key: "
				"%r at position %d." % (char, i))
		value = ((value << 5) | symbol) & 0xFFF
		nrBits += 5
		if nrBits >= 8:
			nrBits -= 8
			data.append((value >> nrBits) & 0xFF)
	return bytes(data)

def decodeRaw(secret):
	"""Map each character of the string to exactly one byte.
	"""
	try:
		return secret.encode("latin-1")
	except UnicodeEncodeError as e:
		raise InvalidSecretCharacter(
			"Invalid raw character in key: "
			"%r at position %d." % (secret[e.start], e.start))

def decodeSecret(secret, encoding=ENCODING_BASE32):
	"""Decode the secret string into the raw HMAC key bytes.
	secret: The secret string.
	encoding: ENCODING_BASE32 or ENCODING_RAW.
	Returns the key bytes.
	"""
	if not isinstance(secret, str):
		raise InvalidSecretCharacter("The secret key must be a string.")
	if encoding == ENCODING_BASE32:
		return decodeBase32(secret)
	if encoding == ENCODING_RAW:
		return decodeRaw(secret)
	raise InvalidOption("Invalid secret encoding '%s'. Expected one of: %s" % (
			    encoding, ", ".join(ENCODINGS)))
