# -*- coding: utf-8 -*-
"""
# HOTP/TOTP generator
# Copyright (c) 2019-2024 Michael Büsch <m@bues.ch>
# Licensed under the GNU/GPL version 2 or later.
"""

import argparse
import libtotp
import sys

__all__ = [
	"main",
]

def run_totp(secret, args):
	result = libtotp.otp.generate(secret,
				      digits=args.digits,
				      algorithm=args.algorithm,
				      encoding=args.encoding,
				      period=args.period,
				      timestamp=args.timestamp,
				      explicitZeroPad=args.zero_pad)
	print(result.otp)
	if args.expires:
		print("expires: %d" % result.expires)
	return 0

def run_hotp(secret, args):
	if args.expires:
		print("Error: HOTP tokens do not expire.", file=sys.stderr)
		return 1
	token = libtotp.otp.hotp(key=secret,
				 counter=args.counter,
				 nrDigits=args.digits,
				 hmacHash=args.algorithm,
				 encoding=args.encoding,
				 explicitZeroPad=args.zero_pad)
	print(token)
	return 0

def main(argv=None):
	p = argparse.ArgumentParser(
		description="HOTP/TOTP token generator - "
			    "libtotp version %s" % libtotp.__version__)
	p.add_argument("-v", "--version", action="store_true",
		       help="show the version and the HMAC backends and exit")
	p.add_argument("--selftest", action="store_true",
		       help="run a quick HMAC self test and exit")
	p.add_argument("-d", "--digits", type=int, default=6,
		       help="Number of token digits, 1 to 10. Default: 6")
	p.add_argument("-a", "--algorithm", type=str, default="SHA-1",
		       help="HMAC hash algorithm. One of: %s. Default: SHA-1" % (
			    ", ".join(libtotp.ALGORITHMS)))
	p.add_argument("-e", "--encoding", type=lambda x: str(x).lower().strip(),
		       default=libtotp.ENCODING_BASE32,
		       choices=libtotp.ENCODINGS,
		       help="Encoding of SECRET. Default: %s" % libtotp.ENCODING_BASE32)
	p.add_argument("-p", "--period", type=int, default=30, metavar="SECONDS",
		       help="TOTP time step length. Default: 30 seconds")
	p.add_argument("-t", "--timestamp", type=int, default=None, metavar="MILLISECONDS",
		       help="Generate the token for this time since the epoch. "
			    "Default: now")
	p.add_argument("-z", "--zero-pad", action="store_true",
		       help="Left-pad short tokens with zeros to exactly DIGITS digits.")
	p.add_argument("-x", "--expires", action="store_true",
		       help="Also print the token expiry time in milliseconds since the epoch.")
	p.add_argument("-c", "--counter", type=int, default=None,
		       help="Generate an HOTP token for this counter instead of a TOTP token.")
	p.add_argument("--no-mlock", action="store_true",
		       help="Do not lock memory and allow swapping to disk.")
	p.add_argument("secret", nargs="?", metavar="SECRET", default=None,
		       help="The secret key. If not given, it is read from the terminal.")
	args = p.parse_args(argv)

	try:
		if args.version:
			print("libtotp version %s" % libtotp.__version__)
			print("HMAC backends: %s" % ", ".join(
			      libtotp.HmacBackend.get().backends))
			return 0

		if args.selftest:
			libtotp.HmacBackend.quickSelfTest()
			print("Self test passed.")
			return 0

		if not args.no_mlock:
			err = libtotp.mlock.MLockWrapper.get().mlockall()
			if err:
				print("WARNING: %s\n"
				      "The secret key could possibly be written "
				      "to a swap-file or swap-partition on disk." % err,
				      file=sys.stderr)
			else:
				print("Memory locked.", file=sys.stderr)

		secret = args.secret
		if secret is None:
			secret = libtotp.util.readSecret("Secret key")
			if secret is None:
				return 1

		if args.counter is None:
			return run_totp(secret, args)
		return run_hotp(secret, args)
	except libtotp.TotpError as e:
		print("Error: " + str(e), file=sys.stderr)
		return 1

if __name__ == "__main__":
	sys.exit(main())
