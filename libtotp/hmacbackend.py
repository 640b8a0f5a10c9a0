# -*- coding: utf-8 -*-
"""
# HMAC wrapper
# Copyright (c) 2023-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

from libtotp.exception import *

import importlib
import os

__all__ = [
	"ALGORITHMS",
	"normalizeAlgorithm",
	"HmacBackend",
]

# Canonical algorithm name: (Cryptodome.Hash module, hashlib name)
ALGORITHMS = {
	"SHA-1"		: ("SHA1",	"sha1"),
	"SHA-224"	: ("SHA224",	"sha224"),
	"SHA-256"	: ("SHA256",	"sha256"),
	"SHA-384"	: ("SHA384",	"sha384"),
	"SHA-512"	: ("SHA512",	"sha512"),
	"SHA3-224"	: ("SHA3_224",	"sha3_224"),
	"SHA3-256"	: ("SHA3_256",	"sha3_256"),
	"SHA3-384"	: ("SHA3_384",	"sha3_384"),
	"SHA3-512"	: ("SHA3_512",	"sha3_512"),
}

def _squash(name):
	for c in ("-", "_", " "):
		name = name.replace(c, "")
	return name.upper().strip()

_SQUASHED_ALGORITHMS = { _squash(n) : n for n in ALGORITHMS }

def normalizeAlgorithm(hmacHash):
	"""Get the canonical name of a hash algorithm.
	Case, '-', '_' and spaces are ignored. So 'sha256' is 'SHA-256'.
	"""
	try:
		return _SQUASHED_ALGORITHMS[_squash(hmacHash)]
	except (KeyError, AttributeError):
		raise UnsupportedAlgorithm("Invalid HMAC hash type '%s'. "
			"Supported are: %s" % (hmacHash, ", ".join(ALGORITHMS)))

class HmacBackend:
	"""Abstraction layer for the HMAC implementation.
	"""

	__singleton = None

	@classmethod
	def get(cls):
		"""Get the HMAC singleton.
		"""
		# Unlocked. Concurrent first calls may build equivalent instances.
		if cls.__singleton is None:
			cls.__singleton = cls()
		return cls.__singleton

	def __init__(self, hmaclib=None):
		"""hmaclib: Force a backend ("cryptodome" or "hashlib").
		            Taken from the TOTP_HMACLIB environment variable, if None.
		"""
		self.__cryptodome = None
		self.__hashlib = None
		self.__hmac = None
		self.__digestmods = {} # Unlocked cache. Racing fills store the same module.

		if hmaclib is None:
			hmaclib = os.getenv("TOTP_HMACLIB", "")
		hmaclib = hmaclib.lower().strip()

		if hmaclib in ("", "cryptodome", "pycryptodomex"):
			# Try to use Cryptodome
			try:
				import Cryptodome
				import Cryptodome.Hash.HMAC
				self.__cryptodome = Cryptodome
			except ImportError as e:
				pass

		if hmaclib in ("", "hashlib"):
			# The Python standard library is the portable fallback.
			import hashlib
			import hmac
			self.__hashlib = hashlib
			self.__hmac = hmac

		if self.__cryptodome is None and self.__hashlib is None:
			msg = "Python module import error."
			if hmaclib in ("cryptodome", "pycryptodomex"):
				msg += "\n'pycryptodomex' is not installed."
			else:
				msg += "\n'TOTP_HMACLIB=%s' is not supported." % hmaclib
			raise HashBackendFailure(msg)

	@property
	def backends(self):
		"""The names of the available backends, in order of preference.
		"""
		names = []
		if self.__cryptodome is not None:
			names.append("cryptodome")
		if self.__hashlib is not None:
			names.append("hashlib")
		return names

	def __cryptodomeDigestmod(self, algorithm):
		"""Get the Cryptodome hash module for the algorithm.
		Returns None, if this Cryptodome version can't do HMAC with it.
		"""
		if self.__cryptodome is None:
			return None
		try:
			return self.__digestmods[algorithm]
		except KeyError:
			pass
		modName = "Cryptodome.Hash." + ALGORITHMS[algorithm][0]
		try:
			digestmod = importlib.import_module(modName)
			if not hasattr(digestmod, "block_size"):
				digestmod = None
		except ImportError as e:
			digestmod = None
		self.__digestmods[algorithm] = digestmod
		return digestmod

	def __hashlibName(self, algorithm):
		if self.__hashlib is None:
			return None
		name = ALGORITHMS[algorithm][1]
		if name not in self.__hashlib.algorithms_available:
			return None
		return name

	def hmac(self, key, message, hmacHash):
		"""Calculate an HMAC signature.
		key: The key bytes.
		message: The message bytes.
		hmacHash: The name string of the hashing algorithm.
		Returns the signature bytes.
		"""
		algorithm = normalizeAlgorithm(hmacHash)
		digestmod = self.__cryptodomeDigestmod(algorithm)
		hashlibName = None
		if digestmod is None:
			hashlibName = self.__hashlibName(algorithm)
		try:
			if digestmod is not None:
				# Use Cryptodome
				h = self.__cryptodome.Hash.HMAC.new(key=key,
								    msg=message,
								    digestmod=digestmod)
				return h.digest()

			if hashlibName is not None:
				# Use hashlib
				h = self.__hmac.new(key, message, hashlibName)
				return h.digest()

		except Exception as e:
			raise HashBackendFailure("HMAC error: %s: %s" % (type(e), str(e)))
		raise HashBackendFailure("HMAC-%s not implemented by: %s" % (
					 algorithm, ", ".join(self.backends)))

	@classmethod
	def quickSelfTest(cls):
		"""Run a quick HMAC self test (RFC 2202, test case 2).
		"""
		inst = cls.get()
		h = inst.hmac(key=b"Jefe",
			      message=b"what do ya want for nothing?",
			      hmacHash="SHA-1")
		if h != bytes.fromhex("effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"):
			raise HashBackendFailure("HMAC: Quick self test failed.")
