# -*- coding: utf-8 -*-

import sys
if sys.version_info[0:2] < (3, 7):
	raise Exception("libtotp requires Python >=3.7")
del sys

import libtotp.exception
import libtotp.hmacbackend
import libtotp.mlock
import libtotp.otp
import libtotp.secret
import libtotp.util
import libtotp.version

from libtotp.exception import *
from libtotp.hmacbackend import *
from libtotp.otp import *
from libtotp.secret import *
from libtotp.version import *

__version__ = VERSION_STRING
