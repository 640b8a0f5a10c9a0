from totp_tstlib import *
initTest(__file__)

from libtotp.exception import *
from libtotp.otp import *
from libtotp.secret import *

KEY = "JBSWY3DPEHPK3PXP"

# RFC 6238 appendix B
RFC6238_KEYS = {
	"SHA-1"		: "12345678901234567890",
	"SHA-256"	: "12345678901234567890123456789012",
	"SHA-512"	: "1234567890123456789012345678901234567890"
			  "123456789012345678901234",
}
RFC6238_VECTORS = (
	(59,		"94287082", "46119246", "90693936"),
	(1111111109,	"07081804", "68084774", "25091201"),
	(1111111111,	"14050471", "67062674", "99943326"),
	(1234567890,	"89005924", "91819424", "93441116"),
	(2000000000,	"69279037", "90698825", "38618901"),
	(20000000000,	"65353130", "77737706", "47863826"),
)

# RFC 4226 appendix D
RFC4226_VECTORS = (
	"755224", "287082", "359152", "969429", "338314",
	"254676", "287922", "162583", "399871", "520489",
)

class Test_OTP(TestCase):
	def test_totp(self):
		self.assertEqual(generate(KEY, timestamp=0).otp, "282760")
		self.assertEqual(generate(KEY, timestamp=1465324707000).otp, "341128")
		self.assertEqual(generate(KEY, timestamp=1365324707000).otp, "089029")
		self.assertEqual(generate("CI2FM6EQCI2FM6EQKU======",
					  timestamp=1465324707000).otp, "984195")
		self.assertEqual(generate(KEY, period=60, timestamp=1465324707000).otp, "313995")
		self.assertEqual(generate(KEY, digits=8, timestamp=1465324707000).otp, "43341128")
		self.assertEqual(generate(KEY, algorithm="SHA-512",
					  timestamp=1465324707000).otp, "093730")
		self.assertEqual(generate("12345678901234567890",
					  digits=8,
					  encoding=ENCODING_RAW,
					  timestamp=59000).otp, "94287082")

	def test_algorithms(self):
		results = {
			"SHA-1"		: "341128",
			"SHA-224"	: "991776",
			"SHA-256"	: "461529",
			"SHA-384"	: "988682",
			"SHA-512"	: "093730",
			"SHA3-224"	: "045085",
			"SHA3-256"	: "255060",
			"SHA3-384"	: "088901",
			"SHA3-512"	: "542105",
		}
		for algorithm, otp in results.items():
			self.assertEqual(generate(KEY, algorithm=algorithm,
						  timestamp=1465324707000).otp, otp)
			self.assertEqual(generate(KEY, algorithm=algorithm.lower().replace("-", ""),
						  timestamp=1465324707000).otp, otp)

	def test_rfc6238(self):
		for t, *otps in RFC6238_VECTORS:
			for algorithm, otp in zip(("SHA-1", "SHA-256", "SHA-512"), otps):
				result = generate(RFC6238_KEYS[algorithm],
						  digits=8,
						  algorithm=algorithm,
						  encoding=ENCODING_RAW,
						  timestamp=t * 1000,
						  explicitZeroPad=True)
				self.assertEqual(result.otp, otp)

	def test_hotp(self):
		keyB32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
		for counter, otp in enumerate(RFC4226_VECTORS):
			self.assertEqual(hotp(key=b"12345678901234567890", counter=counter), otp)
			self.assertEqual(hotp(key=keyB32, counter=counter), otp)
			self.assertEqual(hotp(key="12345678901234567890", counter=counter,
					      encoding=ENCODING_RAW), otp)
		self.assertEqual(hotp(key=b"12345678901234567890", counter=0, nrDigits=3), "224")

	def test_expires(self):
		start = 1665644340000
		self.assertEqual(generate(KEY, timestamp=start - 1),
				 TotpResult(otp="134996", expires=start))
		self.assertEqual(generate(KEY, timestamp=start),
				 TotpResult(otp="886842", expires=start + 30000))
		self.assertEqual(generate(KEY, timestamp=start + 1),
				 TotpResult(otp="886842", expires=start + 30000))
		self.assertEqual(generate(KEY, timestamp=start + 29999),
				 TotpResult(otp="886842", expires=start + 30000))
		self.assertEqual(generate(KEY, timestamp=start + 30000),
				 TotpResult(otp="421127", expires=start + 60000))
		self.assertEqual(generate(KEY, timestamp=start + 30001),
				 TotpResult(otp="421127", expires=start + 60000))

		self.assertEqual(expiry(0, 30), 30000)
		self.assertEqual(expiry(29999, 30), 30000)
		self.assertEqual(expiry(30000, 30), 60000)
		self.assertEqual(expiry(start - 1, 60), start)
		self.assertEqual(expiry(start, 60), start + 60000)

	def test_period_stability(self):
		start = 1665644340000
		for t in range(start, start + 30000, 997):
			self.assertEqual(generate(KEY, timestamp=t).otp, "886842")
		self.assertEqual(generate(KEY, timestamp=start + 29999).otp, "886842")
		self.assertNotEqual(generate(KEY, timestamp=start - 1).otp,
				    generate(KEY, timestamp=start).otp)

	def test_deterministic(self):
		options = GenerationOptions(algorithm="SHA-256", timestamp=1465324707000)
		self.assertEqual(generate(KEY, options), generate(KEY, options))

	def test_time_step(self):
		self.assertEqual(timeStep(0, 30), 0)
		self.assertEqual(timeStep(59000, 30), 1)
		self.assertEqual(timeStep(59999, 30), 1)
		self.assertEqual(timeStep(60000, 30), 2)
		self.assertEqual(timeStep(1111111109000, 30), 0x23523EC)
		self.assertEqual(stepToBytes(0x23523EC), bytes.fromhex("00000000023523EC"))
		self.assertEqual(stepToBytes(0), bytes(8))
		self.assertEqual(stepToBytes(2 ** 64 - 1), b"\xFF" * 8)
		self.assertRaises(TimestampOverflow, lambda: stepToBytes(2 ** 64))
		self.assertRaises(TimestampOverflow, lambda: stepToBytes(-1))

	def test_large_timestamp(self):
		self.assertRaises(TimestampOverflow,
				  lambda: generate(KEY, timestamp=12312354132421332222222222))
		self.assertRaises(TimestampOverflow,
				  lambda: timeStep(12312354132421332222222222, 30))
		self.assertRaises(TimestampOverflow, lambda: generate(KEY, timestamp=-1))
		self.assertRaises(TimestampOverflow, lambda: generate(KEY, timestamp=float("inf")))
		self.assertRaises(TimestampOverflow, lambda: generate(KEY, timestamp=float("nan")))

		# The largest representable step.
		maxTimestamp = (2 ** 64 - 1) * 30 * 1000
		self.assertEqual(timeStep(maxTimestamp + 29999, 30), 2 ** 64 - 1)
		self.assertEqual(len(generate(KEY, timestamp=maxTimestamp,
					      explicitZeroPad=True).otp), 6)
		self.assertEqual(generate(KEY, timestamp=maxTimestamp).expires,
				 maxTimestamp + 30000)
		self.assertRaises(TimestampOverflow,
				  lambda: generate(KEY, timestamp=maxTimestamp + 30000))

	def test_zero_pad(self):
		# Legacy: The token is shorter than the requested number of digits.
		result = generate("3IS523AYRNFUE===", digits=9, timestamp=1634193300000)
		self.assertEqual(result.otp, "97859470")
		result = generate("3IS523AYRNFUE===", digits=9, timestamp=1634193300000,
				  explicitZeroPad=True)
		self.assertEqual(result.otp, "097859470")
		self.assertEqual(generate(KEY, digits=10, timestamp=1465324707000,
					  explicitZeroPad=True).otp[-8:], "43341128")

		for digits in range(1, 10 + 1):
			for t in range(0, 3000000, 300000):
				otp = generate(KEY, digits=digits, timestamp=t,
					       explicitZeroPad=True).otp
				self.assertEqual(len(otp), digits)
				self.assertTrue(otp.isdigit())
				legacy = generate(KEY, digits=digits, timestamp=t).otp
				self.assertLessEqual(len(legacy), digits)
				self.assertTrue(otp.endswith(legacy))

	def test_truncate(self):
		# RFC 4226 section 5.4
		signature = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
		self.assertEqual(truncate(signature, 6), "872921")
		self.assertEqual(truncate(signature, 9), "357872921")
		self.assertEqual(truncate(signature, 10), "1357872921")
		self.assertEqual(truncate(signature, 10, explicitZeroPad=True), "1357872921")
		signature = bytes.fromhex("000000007f0000000000000000000000000000ff")
		self.assertEqual(truncate(signature, 10), "0")
		self.assertEqual(truncate(signature, 4, explicitZeroPad=True), "0000")
		self.assertRaises(TotpError, lambda: truncate(b"\x00" * 19, 6))
		self.assertRaises(InvalidDigits, lambda: truncate(signature, 11))

	def test_empty_secret(self):
		result = generate("", timestamp=1465324707000, explicitZeroPad=True)
		self.assertEqual(len(result.otp), 6)
		self.assertEqual(result, generate("=", timestamp=1465324707000,
						  explicitZeroPad=True))
		self.assertEqual(result, generate("", encoding=ENCODING_RAW,
						  timestamp=1465324707000,
						  explicitZeroPad=True))
		self.assertEqual(result.otp, hotp(b"", timeStep(1465324707000, 30)))

	def test_options(self):
		self.assertEqual(GenerationOptions(),
				 GenerationOptions(digits=6,
						   algorithm="SHA-1",
						   encoding=ENCODING_BASE32,
						   period=30,
						   timestamp=None,
						   explicitZeroPad=False))
		options = GenerationOptions(timestamp=1465324707000)
		self.assertEqual(generate(KEY, options).otp, "341128")
		self.assertEqual(generate(KEY, { "timestamp" : 1465324707000 }).otp, "341128")
		self.assertEqual(generate(KEY, options, digits=8).otp, "43341128")
		self.assertEqual(generate(KEY, options, digits=None).otp, "341128")
		self.assertEqual(generate(KEY, timestamp=1465324707000.9).otp, "341128")
		self.assertEqual(makeOptions({ "period" : 60 }, digits=8),
				 GenerationOptions(period=60, digits=8))
		self.assertRaises(InvalidOption, lambda: generate(KEY, { "foo" : 1 }))
		self.assertRaises(InvalidOption, lambda: generate(KEY, foo=1))
		self.assertRaises(InvalidOption, lambda: generate(KEY, timestamp="now"))
		self.assertRaises(InvalidOption, lambda: generate(KEY, encoding="base64"))

		# Default timestamp is now.
		result = generate(KEY)
		self.assertTrue(result.expires > 1665644340000)
		self.assertEqual(len(generate(KEY, explicitZeroPad=True).otp), 6)

	def test_totp_errors(self):
		self.assertRaises(InvalidSecretCharacter, lambda: generate("JBSWY3DPEHPK3!@#"))
		self.assertRaises(InvalidDigits, lambda: generate(KEY, digits=0))
		self.assertRaises(InvalidDigits, lambda: generate(KEY, digits=11))
		self.assertRaises(InvalidDigits, lambda: generate(KEY, digits=6.0))
		self.assertRaises(InvalidDigits, lambda: generate(KEY, digits=True))
		self.assertRaises(InvalidPeriod, lambda: generate(KEY, period=0))
		self.assertRaises(InvalidPeriod, lambda: generate(KEY, period=-30))
		self.assertRaises(InvalidPeriod, lambda: generate(KEY, period=1.5))
		self.assertRaises(UnsupportedAlgorithm, lambda: generate(KEY, algorithm="foobar"))
		self.assertRaises(UnsupportedAlgorithm, lambda: generate(KEY, algorithm="MD5"))
		self.assertRaises(InvalidPeriod, lambda: timeStep(0, 0))
		self.assertRaises(InvalidPeriod, lambda: expiry(0, 0))

		# Configuration errors come before secret errors.
		self.assertRaises(InvalidDigits, lambda: generate("JBSWY3DPEHPK3!@#", digits=0))
		self.assertRaises(UnsupportedAlgorithm,
				  lambda: generate("JBSWY3DPEHPK3!@#", algorithm="foobar"))

	def test_hotp_errors(self):
		self.assertRaises(InvalidCounter, lambda: hotp(key="ORSXG5A=", counter=-1))
		self.assertRaises(InvalidCounter, lambda: hotp(key="ORSXG5A=", counter=2**64))
		self.assertRaises(InvalidCounter, lambda: hotp(key="ORSXG5A=", counter=1.0))
		self.assertRaises(InvalidDigits, lambda: hotp(key="ORSXG5A=", counter=0, nrDigits=0))
		self.assertRaises(UnsupportedAlgorithm,
				  lambda: hotp(key="ORSXG5A=", counter=0, hmacHash="foobar"))
		self.assertRaises(InvalidSecretCharacter, lambda: hotp(key="ORSXG5A1", counter=0))
		self.assertRaises(TotpError, lambda: hotp(key=1234, counter=0))

	def test_zero_pad_option_type(self):
		for value in ("false", "true", 1, 0, 1.0):
			self.assertRaises(InvalidOption,
					  lambda: generate(KEY, timestamp=0, explicitZeroPad=value))
			self.assertRaises(InvalidOption,
					  lambda: hotp(key=KEY, counter=0, explicitZeroPad=value))
		self.assertRaises(InvalidOption,
				  lambda: generate(KEY, { "explicitZeroPad" : "false" }))
		self.assertEqual(generate(KEY, timestamp=0, explicitZeroPad=False).otp, "282760")
