# -*- coding: utf-8 -*-
"""
# mlock support
# Copyright (c) 2019-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

import platform
import os
import sys

__all__ = [
	"MLockWrapper",
]

class MLockWrapper:
	"""Keeps the process memory, and with it the OTP secret, out of swap.
	"""

	__singleton = None

	@classmethod
	def get(cls):
		if cls.__singleton is None:
			cls.__singleton = cls()
		return cls.__singleton

	def __init__(self):
		self.__ffi = None
		self.__libc = None

		if os.name == "posix" and "linux" in sys.platform.lower():
			try:
				from cffi import FFI
			except ImportError as e:
				print("Failed to import CFFI: %s\n"
				      "Cannot use mlockall() via CFFI.\n"
				      "You might want to install CFFI by running: "
				      "pip3 install cffi" % (
				      str(e)), file=sys.stderr)
				return
			self.__ffi = FFI()
			self.__ffi.cdef("int mlockall(int flags);")
			self.__libc = self.__ffi.dlopen(None)

	@property
	def supported(self):
		return self.__libc is not None

	@staticmethod
	def __flags():
		if platform.machine().lower() in (
				"alpha",
				"ppc", "ppc64", "ppcle", "ppc64le",
				"sparc", "sparc64" ):
			return 0x2000 | 0x4000 # MCL_CURRENT | MCL_FUTURE
		return 0x1 | 0x2 # MCL_CURRENT | MCL_FUTURE

	def mlockall(self):
		"""Lock all current and all future memory.
		Returns an error string or an empty string on success.
		"""
		if not self.supported:
			return "mlockall() is not supported on this operating system."
		ret = self.__libc.mlockall(self.__flags())
		return os.strerror(self.__ffi.errno) if ret else ""
